"""
Массовые операции с шаблонами недельного расписания:
копирование недели, очистка недели, замена преподавателя
"""
import logging

from timetable.core.auth import require_admin
from timetable.core.db_manager import db, transaction
from timetable.core.errors import NotFoundError, ValidationError
from timetable.models.schedule import PARITIES, LessonTemplate
from timetable.models.system import Group
from timetable.services.audit import log_change

logger = logging.getLogger(__name__)


def _parse_group_id(group_id):
    if group_id is None or group_id == '' or isinstance(group_id, bool):
        raise ValidationError('Укажите group_id')
    try:
        group_id = int(group_id)
    except (TypeError, ValueError):
        raise ValidationError('group_id должен быть числом')
    if db.session.get(Group, group_id) is None:
        raise NotFoundError('Группа не найдена')
    return group_id


def _parse_parity(value, field):
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'Укажите {field}')
    try:
        parity = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} должен быть 0 (каждая), 1 (чётная) или 2 (нечётная)')
    if parity not in PARITIES:
        raise ValidationError(f'{field} должен быть 0 (каждая), 1 (чётная) или 2 (нечётная)')
    return parity


def _templates_query(group_id, parity):
    return db.session.query(LessonTemplate).filter(
        LessonTemplate.group_id == group_id,
        LessonTemplate.parity == parity
    )


def copy_week(actor, group_id, from_parity, to_parity):
    """
    Скопировать шаблоны группы с одной недели на другую

    Содержимое целевой недели полностью заменяется содержимым исходной.
    Исходные шаблоны копируются в память до удаления, поэтому совпадающие
    недели не теряют данные.

    Returns:
        Количество скопированных шаблонов
    """
    require_admin(actor)
    group_id = _parse_group_id(group_id)
    from_parity = _parse_parity(from_parity, 'from_week')
    to_parity = _parse_parity(to_parity, 'to_week')

    with transaction():
        source = [
            template.copy_fields() for template in
            _templates_query(group_id, from_parity).order_by(LessonTemplate.day_of_week, LessonTemplate.start_time).all()
        ]
        if not source:
            raise NotFoundError('Нет занятий для копирования')

        replaced = [template.to_dict() for template in _templates_query(group_id, to_parity).all()]

        # Перезаписываем целевую неделю
        _templates_query(group_id, to_parity).delete()
        copies = [LessonTemplate(parity=to_parity, **fields) for fields in source]
        db.session.add_all(copies)

    logger.info(
        f"Неделя {from_parity} → {to_parity} скопирована для группы {group_id}: "
        f"{len(copies)} шаблонов, заменено {len(replaced)} (admin {actor.id})"
    )

    log_change(
        admin_id=actor.id,
        action_type='copy_week',
        target_type='lessons',
        target_id=None,
        old_value={'group_id': group_id, 'week': to_parity, 'templates': replaced},
        new_value={
            'group_id': group_id,
            'from_week': from_parity,
            'to_week': to_parity,
            'templates': [template.to_dict() for template in copies]
        }
    )
    return len(copies)


def clear_week(actor, group_id, parity):
    """
    Удалить все шаблоны группы на определённой неделе

    Returns:
        Количество удалённых шаблонов
    """
    require_admin(actor)
    group_id = _parse_group_id(group_id)
    parity = _parse_parity(parity, 'week')

    with transaction():
        removed = [template.to_dict() for template in _templates_query(group_id, parity).all()]
        count = _templates_query(group_id, parity).delete()

    logger.info(f"Очищена неделя {parity} для группы {group_id}: удалено {count} (admin {actor.id})")

    if count > 0:
        log_change(
            admin_id=actor.id,
            action_type='clear_week',
            target_type='lessons',
            target_id=None,
            old_value={'group_id': group_id, 'week': parity, 'templates': removed},
            new_value={'group_id': group_id, 'week': parity, 'count': count}
        )
    return count


def replace_teacher(actor, group_id, old_teacher, new_teacher):
    """
    Заменить преподавателя во всех шаблонах группы

    Имена сравниваются точно (после обрезки пробелов).

    Returns:
        Количество обновлённых шаблонов
    """
    require_admin(actor)
    old_name = old_teacher.strip() if isinstance(old_teacher, str) else ''
    new_name = new_teacher.strip() if isinstance(new_teacher, str) else ''
    if not old_name or not new_name:
        raise ValidationError('Укажите group_id, old_teacher и new_teacher')
    group_id = _parse_group_id(group_id)

    with transaction():
        affected = db.session.query(LessonTemplate).filter(
            LessonTemplate.group_id == group_id,
            LessonTemplate.teacher_name == old_name
        )
        affected_ids = [template.id for template in affected.all()]
        count = affected.update({LessonTemplate.teacher_name: new_name})

    logger.info(
        f"Заменён преподаватель \"{old_name}\" → \"{new_name}\" в {count} шаблонах "
        f"группы {group_id} (admin {actor.id})"
    )

    if count > 0:
        log_change(
            admin_id=actor.id,
            action_type='replace_teacher',
            target_type='lessons',
            target_id=None,
            old_value={'group_id': group_id, 'teacher': old_name, 'template_ids': affected_ids},
            new_value={'group_id': group_id, 'teacher': new_name, 'template_ids': affected_ids}
        )
    return count
