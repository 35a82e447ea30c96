"""
Шаблоны недельного расписания (день недели + чётность)
"""
import logging

from timetable.core.auth import require_admin
from timetable.core.db_manager import db, transaction
from timetable.core.errors import NotFoundError, ValidationError
from timetable.models.schedule import PARITIES, LessonTemplate
from timetable.models.system import Group, User
from timetable.services.audit import log_change
from timetable.services.lesson_fields import clean_lesson, ensure_teachers_exist, parse_optional_int
from timetable.services.series import MAX_WEEKDAY

logger = logging.getLogger(__name__)


def list_templates(group_id=None, parity=None):
    query = db.session.query(LessonTemplate)
    group_id = parse_optional_int(group_id, 'groupId')
    parity = parse_optional_int(parity, 'week')
    if group_id is not None:
        query = query.filter(LessonTemplate.group_id == group_id)
    if parity is not None:
        query = query.filter(LessonTemplate.parity == parity)
    templates = query.order_by(
        LessonTemplate.group_id, LessonTemplate.parity,
        LessonTemplate.day_of_week, LessonTemplate.start_time
    ).all()
    return [template.to_dict() for template in templates]


def create_template(actor, data):
    """Создать шаблон занятия"""
    require_admin(actor)
    if not isinstance(data, dict):
        raise ValidationError('Некорректные данные занятия')

    group_id = parse_optional_int(data.get('group_id'), 'group_id')
    day = parse_optional_int(data.get('day'), 'day')
    parity = parse_optional_int(data.get('week'), 'week')
    if group_id is None or day is None or parity is None:
        raise ValidationError('Укажите group_id, day и week')
    if not 0 <= day <= MAX_WEEKDAY:
        raise ValidationError('День недели должен быть от 0 (Пн) до 5 (Сб)')
    if parity not in PARITIES:
        raise ValidationError('week должен быть 0 (каждая), 1 (чётная) или 2 (нечётная)')
    if db.session.get(Group, group_id) is None:
        raise NotFoundError('Группа не найдена')

    fields = clean_lesson(data)
    ensure_teachers_exist([fields['teacher_id']])

    teacher_name = str(data.get('teacher') or '').strip()
    if not teacher_name and fields['teacher_id'] is not None:
        teacher_name = db.session.get(User, fields['teacher_id']).full_name or ''

    with transaction():
        template = LessonTemplate(
            group_id=group_id, day_of_week=day, parity=parity,
            teacher_name=teacher_name, **fields
        )
        db.session.add(template)

    logger.info(f"Создан шаблон {template.id} для группы {group_id} (admin {actor.id})")
    log_change(actor.id, 'create_template', 'lesson_template', template.id, None, template.to_dict())
    return template


def delete_template(actor, template_id):
    require_admin(actor)
    template = db.session.get(LessonTemplate, template_id)
    if template is None:
        raise NotFoundError('Шаблон не найден')

    with transaction():
        snapshot = template.to_dict()
        db.session.delete(template)

    log_change(actor.id, 'delete_template', 'lesson_template', template_id, snapshot, None)
