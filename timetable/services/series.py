"""
Генерация дат для серии занятий на основе дня недели и чётности недели
"""
from datetime import date, timedelta
from typing import List

from timetable.core.errors import ValidationError
from timetable.models.schedule import PARITIES, PARITY_ANY, PARITY_EVEN, PARITY_ODD

# 0=Пн ... 5=Сб, воскресенье не используется
MAX_WEEKDAY = 5


def iso_week_is_even(day: date) -> bool:
    """Чётность недели по ISO-8601"""
    return day.isocalendar()[1] % 2 == 0


def parity_matches(day: date, parity: int) -> bool:
    if parity == PARITY_ANY:
        return True
    if parity == PARITY_EVEN:
        return iso_week_is_even(day)
    if parity == PARITY_ODD:
        return not iso_week_is_even(day)
    return False


def generate_dates(weekday: int, parity: int, semester_start: date, semester_end: date) -> List[date]:
    """
    Генерирует даты занятия в пределах семестра

    Args:
        weekday: 0 (Пн) - 5 (Сб)
        parity: 0 (каждая), 1 (чётная), 2 (нечётная)
        semester_start: первый день семестра (включительно)
        semester_end: последний день семестра (включительно)

    Returns:
        Список дат по возрастанию; пустой, если ни одна неделя не подошла
    """
    if not isinstance(weekday, int) or isinstance(weekday, bool) or not 0 <= weekday <= MAX_WEEKDAY:
        raise ValidationError('День недели должен быть от 0 (Пн) до 5 (Сб)')
    if parity not in PARITIES:
        raise ValidationError('Тип недели должен быть 0 (каждая), 1 (чётная) или 2 (нечётная)')

    dates = []
    current = semester_start
    while current <= semester_end:
        if current.weekday() == weekday and parity_matches(current, parity):
            dates.append(current)
        current += timedelta(days=1)
    return dates
