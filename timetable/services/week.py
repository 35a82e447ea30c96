"""
Расчёт информации об учебной неделе.

Учебный год начинается 1 сентября, неделя считается с понедельника по воскресенье.
Поддерживается смещение (week_offset) для прошлых и будущих недель.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from timetable.core.errors import ValidationError

WEEK_TYPE_EVEN = 'чётная'
WEEK_TYPE_ODD = 'нечётная'

# Около двадцати лет в обе стороны
MAX_WEEK_OFFSET = 1000


@dataclass(frozen=True)
class WeekInfo:
    """Информация о неделе (не хранится в БД, считается на каждый запрос)"""
    week_number: int
    is_even: bool
    week_start: date
    week_end: date

    @property
    def week_type(self) -> str:
        return WEEK_TYPE_EVEN if self.is_even else WEEK_TYPE_ODD

    def to_dict(self) -> dict:
        # Даты отдаём как локальные календарные дни, без перевода в UTC
        return {
            'weekNumber': self.week_number,
            'isEven': self.is_even,
            'weekType': self.week_type,
            'weekStart': self.week_start.isoformat(),
            'weekEnd': self.week_end.isoformat()
        }


def academic_year_start(today: date, start_month: int = 9) -> date:
    """1 сентября текущего учебного года для указанного дня"""
    year = today.year if today.month >= start_month else today.year - 1
    return date(year, start_month, 1)


def monday_of(day: date) -> date:
    """Понедельник недели, в которую попадает день (воскресенье относится к прошедшей неделе)"""
    return day - timedelta(days=day.weekday())


def compute_week(now, week_offset: int = 0, start_month: int = 9) -> WeekInfo:
    """
    Возвращает информацию о неделе с учётом смещения

    Args:
        now: текущий момент (datetime или date, локальное время сервера)
        week_offset: смещение от текущей недели (0 текущая, -1 предыдущая и т.д.)
        start_month: месяц начала учебного года

    Returns:
        WeekInfo с номером недели от начала учебного года, чётностью и границами
    """
    if abs(week_offset) > MAX_WEEK_OFFSET:
        raise ValidationError(f'weekOffset должен быть в пределах ±{MAX_WEEK_OFFSET}')

    today = now.date() if isinstance(now, datetime) else now

    year_start = academic_year_start(today, start_month)

    target = today + timedelta(days=week_offset * 7)
    week_start = monday_of(target)
    week_end = week_start + timedelta(days=6)

    if week_start <= year_start <= week_end:
        # Неделя, в которую попадает 1 сентября, считается первой
        week_number = 1
    else:
        diff_days = (week_start - year_start).days
        week_number = diff_days // 7 + 1

    return WeekInfo(
        week_number=week_number,
        is_even=week_number % 2 == 0,
        week_start=week_start,
        week_end=week_end
    )
