"""
Разбор и проверка полей занятия, пришедших от клиента
"""
from datetime import date, time

from timetable.core.db_manager import db
from timetable.core.errors import ValidationError
from timetable.models.schedule import LESSON_TYPES, format_time
from timetable.models.system import ROLE_TEACHER, User

REQUIRED_FIELDS = ('start_time', 'end_time', 'subject', 'room', 'type')


def parse_date(value, field='date'):
    """Календарная дата из строки YYYY-MM-DD"""
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError(f'Поле {field} обязательно')
    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f'Некорректная дата в поле {field}: {value}')
    if len(value.strip()) != 10:
        raise ValidationError(f'Дата в поле {field} должна быть в формате YYYY-MM-DD')
    return parsed


def parse_time(value, field):
    """Время из строки HH:MM или HH:MM:SS"""
    if isinstance(value, time):
        return value
    try:
        parsed = time.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f'Некорректное время в поле {field}: {value}')
    if parsed.tzinfo is not None:
        raise ValidationError(f'Время в поле {field} указывается без часового пояса: {value}')
    return parsed


def parse_optional_int(value, field):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError(f'Поле {field} должно быть числом')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Поле {field} должно быть числом')


def _text(raw, field):
    value = raw.get(field)
    if value is None:
        return ''
    return str(value).strip()


def clean_lesson(raw, index=None):
    """
    Проверяет одно занятие и приводит поля к типам модели

    Args:
        raw: словарь с полями start_time, end_time, subject, room, type, teacher_id (необязательно)
        index: номер занятия в списке (для текста ошибки)

    Returns:
        dict с полями start_time, end_time (time), subject, room, type, teacher_id
    """
    where = f'Занятие #{index + 1}: ' if index is not None else ''
    if not isinstance(raw, dict):
        raise ValidationError(f'{where}некорректные данные занятия')

    missing = [field for field in REQUIRED_FIELDS if not _text(raw, field)]
    if missing:
        raise ValidationError(f"{where}не заполнены поля: {', '.join(missing)}")

    start_time = parse_time(_text(raw, 'start_time'), 'start_time')
    end_time = parse_time(_text(raw, 'end_time'), 'end_time')
    if start_time >= end_time:
        raise ValidationError(f'{where}время начала должно быть раньше времени окончания')

    lesson_type = _text(raw, 'type')
    if lesson_type not in LESSON_TYPES:
        raise ValidationError(f"{where}тип занятия должен быть одним из: {', '.join(LESSON_TYPES)}")

    try:
        teacher_id = parse_optional_int(raw.get('teacher_id'), 'teacher_id')
    except ValidationError as e:
        raise ValidationError(f'{where}{e.message}')

    return {
        'start_time': start_time,
        'end_time': end_time,
        'subject': _text(raw, 'subject'),
        'room': _text(raw, 'room'),
        'type': lesson_type,
        'teacher_id': teacher_id
    }


def ensure_teachers_exist(teacher_ids):
    """Все указанные ID должны принадлежать преподавателям"""
    wanted = {teacher_id for teacher_id in teacher_ids if teacher_id is not None}
    if not wanted:
        return
    found = {
        row[0] for row in db.session.query(User.id)
        .filter(User.id.in_(wanted), User.role == ROLE_TEACHER)
        .all()
    }
    unknown = sorted(wanted - found)
    if unknown:
        raise ValidationError(f"Преподаватель не найден: {', '.join(str(i) for i in unknown)}")


def lesson_payload(cleaned):
    """JSON-снимок проверенного занятия для журнала изменений"""
    return {
        'start_time': format_time(cleaned['start_time']),
        'end_time': format_time(cleaned['end_time']),
        'subject': cleaned['subject'],
        'teacher_id': cleaned['teacher_id'],
        'room': cleaned['room'],
        'type': cleaned['type']
    }
