"""
Вспомогательные функции для маршрутов
"""
from flask import current_app, request

from timetable.core.errors import ValidationError


def get_json_body():
    """Тело запроса как словарь; пустое или некорректное тело даёт пустой словарь"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def get_week_offset():
    """Смещение недели из query-параметра weekOffset (0 = текущая неделя)"""
    raw = request.args.get('weekOffset', '0').strip() or '0'
    try:
        return int(raw)
    except ValueError:
        raise ValidationError('weekOffset должен быть целым числом')


def get_int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f'{name} должен быть целым числом')
    if value < 0:
        raise ValidationError(f'{name} не может быть отрицательным')
    return value


def academic_start_month():
    return current_app.config.get('ACADEMIC_YEAR_START_MONTH', 9)


def semester_bounds():
    return current_app.config['SEMESTER_START'], current_app.config['SEMESTER_END']
