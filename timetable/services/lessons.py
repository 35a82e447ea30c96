"""
Занятия на конкретные даты: просмотр, создание (одно занятие или серия на семестр), удаление
"""
import logging
from datetime import date

from timetable.core.auth import require_admin
from timetable.core.db_manager import db, transaction
from timetable.core.errors import NotFoundError, ValidationError
from timetable.models.schedule import Lesson
from timetable.models.system import Group
from timetable.services.audit import log_change
from timetable.services.lesson_fields import (
    clean_lesson, ensure_teachers_exist, parse_date, parse_optional_int
)
from timetable.services.series import generate_dates

logger = logging.getLogger(__name__)

DEFAULT_RANGE_START = date(1970, 1, 1)
DEFAULT_RANGE_END = date(2099, 12, 31)


def list_lessons(group_id=None, start=None, end=None):
    """Все занятия в диапазоне дат (по умолчанию без ограничений), с названием группы"""
    start = parse_date(start, 'start') if start else DEFAULT_RANGE_START
    end = parse_date(end, 'end') if end else DEFAULT_RANGE_END
    group_id = parse_optional_int(group_id, 'groupId')

    query = db.session.query(Lesson, Group.name).join(Group, Group.id == Lesson.group_id).filter(
        Lesson.lesson_date.between(start, end)
    )
    if group_id is not None:
        query = query.filter(Lesson.group_id == group_id)

    result = []
    for lesson, group_name in query.order_by(Lesson.lesson_date, Lesson.start_time).all():
        item = lesson.to_dict()
        item['group_name'] = group_name
        result.append(item)
    return result


def resolve_dates(data, semester_start, semester_end):
    """
    Даты для нового занятия

    single_date: одно конкретное занятие (админ выбрал день в календаре);
    day + week: серия на весь семестр по дню недели и чётности.
    """
    if data.get('single_date'):
        return [parse_date(data['single_date'], 'single_date')]

    day = parse_optional_int(data.get('day'), 'day')
    week = parse_optional_int(data.get('week'), 'week')
    if day is not None and week is not None:
        return generate_dates(day, week, semester_start, semester_end)
    return []


def create_lessons(actor, data, semester_start, semester_end):
    """
    Создать занятие или серию занятий в одной транзакции

    Returns:
        Список ID созданных занятий
    """
    require_admin(actor)
    if not isinstance(data, dict):
        raise ValidationError('Некорректные данные занятия')

    group_id = parse_optional_int(data.get('group_id'), 'group_id')
    if group_id is None:
        raise ValidationError('Укажите group_id')
    if db.session.get(Group, group_id) is None:
        raise NotFoundError('Группа не найдена')

    fields = clean_lesson(data)
    ensure_teachers_exist([fields['teacher_id']])

    dates = resolve_dates(data, semester_start, semester_end)
    if not dates:
        raise ValidationError('Не удалось определить даты для занятия')

    with transaction():
        created = [Lesson(group_id=group_id, lesson_date=lesson_date, **fields) for lesson_date in dates]
        db.session.add_all(created)
        db.session.flush()
        inserted_ids = [lesson.id for lesson in created]

    logger.info(f"Создано {len(inserted_ids)} занятий ({fields['subject']}) для группы {group_id} (admin {actor.id})")

    log_change(
        admin_id=actor.id,
        action_type='create_lesson_series' if len(inserted_ids) > 1 else 'create_lesson',
        target_type='lesson',
        target_id=inserted_ids[0] if len(inserted_ids) == 1 else None,
        old_value=None,
        new_value={
            'count': len(inserted_ids),
            'subject': fields['subject'],
            'group_id': group_id,
            'dates': [lesson_date.isoformat() for lesson_date in dates]
        }
    )
    return inserted_ids


def delete_lesson(actor, lesson_id):
    """Удалить одно занятие"""
    require_admin(actor)
    lesson = db.session.get(Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError('Занятие не найдено')

    with transaction():
        snapshot = lesson.to_dict()
        db.session.delete(lesson)

    logger.info(f"Удалено занятие {lesson_id} (admin {actor.id})")
    log_change(
        admin_id=actor.id,
        action_type='delete_lesson',
        target_type='lesson',
        target_id=lesson_id,
        old_value=snapshot,
        new_value=None
    )
