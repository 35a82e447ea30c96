"""
Расписание группы на конкретный день: чтение и полная перезапись
"""
import logging

from timetable.core.auth import require_admin
from timetable.core.db_manager import db, transaction
from timetable.core.errors import NotFoundError, ValidationError
from timetable.models.schedule import Lesson
from timetable.models.system import Group
from timetable.services.audit import log_change
from timetable.services.lesson_fields import (
    clean_lesson, ensure_teachers_exist, lesson_payload, parse_date, parse_optional_int
)

logger = logging.getLogger(__name__)


def _day_query(lesson_date, group_id):
    return db.session.query(Lesson).filter(
        Lesson.lesson_date == lesson_date,
        Lesson.group_id == group_id
    )


def get_day(lesson_date, group_id):
    """Занятия группы на день, по времени начала"""
    lesson_date = parse_date(lesson_date)
    group_id = parse_optional_int(group_id, 'groupId')
    if group_id is None:
        raise ValidationError('date и groupId обязательны')
    lessons = _day_query(lesson_date, group_id).order_by(Lesson.start_time).all()
    return {
        'date': lesson_date.isoformat(),
        'groupId': group_id,
        'lessons': [lesson.to_dict() for lesson in lessons]
    }


def replace_day(actor, lesson_date, group_id, lessons, today):
    """
    Полная перезапись расписания группы на конкретный день

    Все проверки выполняются до начала транзакции. Затем в одной транзакции
    старые занятия (date, group_id) удаляются и вставляются новые; при любой
    ошибке изменения откатываются. Повторный вызов с теми же данными даёт то же
    состояние.

    Args:
        actor: текущий пользователь (нужна роль admin)
        lesson_date: дата (строка YYYY-MM-DD или date)
        group_id: ID группы
        lessons: список занятий (пустой список очищает день)
        today: текущий календарный день сервера

    Returns:
        dict с датой, группой и количеством удалённых/созданных занятий
    """
    require_admin(actor)

    if not lesson_date or not group_id or not isinstance(lessons, list):
        raise ValidationError('date, groupId и lessons обязательны')

    lesson_date = parse_date(lesson_date)
    group_id = parse_optional_int(group_id, 'groupId')

    if lesson_date < today:
        logger.warning(f"Отклонена правка прошедшей даты {lesson_date} (группа {group_id}, admin {actor.id})")
        raise ValidationError('Нельзя редактировать расписание прошедших дат')

    if db.session.get(Group, group_id) is None:
        raise NotFoundError('Группа не найдена')

    cleaned = [clean_lesson(raw, index) for index, raw in enumerate(lessons)]
    ensure_teachers_exist(item['teacher_id'] for item in cleaned)

    with transaction():
        # Сохраняем старое расписание (до изменений)
        old_lessons = [lesson.to_dict() for lesson in _day_query(lesson_date, group_id).all()]

        deleted = _day_query(lesson_date, group_id).delete()

        for item in cleaned:
            db.session.add(Lesson(group_id=group_id, lesson_date=lesson_date, **item))

    logger.info(
        f"Расписание на {lesson_date} для группы {group_id} перезаписано: "
        f"удалено {deleted}, создано {len(cleaned)} (admin {actor.id})"
    )

    log_change(
        admin_id=actor.id,
        action_type='update_schedule_day',
        target_type='schedule_day',
        target_id=None,
        old_value={
            'date': lesson_date.isoformat(),
            'group_id': group_id,
            'lessons': old_lessons
        },
        new_value={
            'date': lesson_date.isoformat(),
            'group_id': group_id,
            'lessons': [lesson_payload(item) for item in cleaned]
        }
    )

    return {
        'date': lesson_date.isoformat(),
        'groupId': group_id,
        'deleted': deleted,
        'created': len(cleaned)
    }
