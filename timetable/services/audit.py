"""
Журнал изменений расписания (аудит-лог).

Записывает действия администратора в таблицу schedule_changes: кто, когда и что
изменил, со снимками состояния до и после. Запись выполняется после фиксации
основной операции и никогда не прерывает её.
"""
import logging

from timetable.core.db_manager import db
from timetable.models.schedule import ScheduleChange

logger = logging.getLogger(__name__)


def log_change(admin_id, action_type, target_type, target_id=None, old_value=None, new_value=None):
    """
    Логирует действие администратора

    Args:
        admin_id: ID администратора
        action_type: тип действия ('create_lesson_series', 'copy_week', ...)
        target_type: тип объекта ('lesson', 'group', 'lessons', 'schedule_day')
        target_id: ID изменённого объекта (None для массовых операций)
        old_value: снимок до изменения (JSON-совместимый)
        new_value: снимок после изменения

    Returns:
        Созданная запись или None, если записать не удалось
    """
    try:
        change = ScheduleChange(
            admin_id=admin_id,
            action_type=action_type,
            target_type=target_type,
            target_id=target_id,
            old_value=old_value,
            new_value=new_value
        )
        db.session.add(change)
        db.session.commit()
        return change
    except Exception as e:
        # Основная операция уже зафиксирована, откатываем только запись журнала
        db.session.rollback()
        logger.error(
            f"Ошибка логирования изменения: admin_id={admin_id}, action={action_type}, "
            f"target={target_type}:{target_id}, error={e}"
        )
        return None


def get_change_history(limit=50, offset=0):
    """История изменений, новые записи первыми"""
    return (
        db.session.query(ScheduleChange)
        .order_by(ScheduleChange.changed_at.desc(), ScheduleChange.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
