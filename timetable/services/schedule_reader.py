"""
Чтение расписания на неделю для текущего пользователя.

Ветка выбирается по роли:
- admin: расписание любой группы (название группы обязательно);
- student: только своей группы;
- teacher: собственные занятия во всех группах.
"""
from timetable.core.db_manager import db
from timetable.core.errors import AuthorizationError, NotFoundError, ValidationError
from timetable.models.schedule import Lesson
from timetable.models.system import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER, Group
from timetable.services.week import compute_week


def _lessons_in_range(week, **filters):
    query = db.session.query(Lesson).filter(
        Lesson.lesson_date.between(week.week_start, week.week_end)
    ).filter_by(**filters)
    return query.order_by(Lesson.lesson_date, Lesson.start_time).all()


def _group_by_name(name):
    group = db.session.query(Group).filter_by(name=name).first()
    if group is None:
        raise NotFoundError('Группа не найдена')
    return group


def _admin_lessons(actor, week, group_name):
    if not group_name:
        raise ValidationError('Выберите группу')
    group = _group_by_name(group_name)
    return group.name, [lesson.to_dict() for lesson in _lessons_in_range(week, group_id=group.id)]


def _student_lessons(actor, week, group_name):
    # Студент видит только свою группу, параметр group игнорируется
    if actor.group is None:
        raise ValidationError('Студент не привязан к группе')
    group = actor.group
    return group.name, [lesson.to_dict() for lesson in _lessons_in_range(week, group_id=group.id)]


def _teacher_lessons(actor, week, group_name):
    lessons = []
    for lesson in _lessons_in_range(week, teacher_id=actor.id):
        item = lesson.to_dict()
        item['group_name'] = lesson.group.name
        lessons.append(item)
    return None, lessons


LESSON_READERS = {
    ROLE_ADMIN: _admin_lessons,
    ROLE_STUDENT: _student_lessons,
    ROLE_TEACHER: _teacher_lessons,
}


def read_week_schedule(actor, now, week_offset=0, group_name=None, start_month=9):
    """
    Расписание на неделю с учётом смещения

    Returns:
        dict с информацией о неделе (номер, чётность, границы), группой и занятиями
    """
    reader = LESSON_READERS.get(getattr(actor, 'role', None))
    if reader is None:
        raise AuthorizationError(f"Неизвестная роль: {getattr(actor, 'role', None)}")

    week = compute_week(now, week_offset, start_month)
    group, lessons = reader(actor, week, group_name)

    result = week.to_dict()
    result['group'] = group
    result['lessons'] = lessons
    return result


def read_group_week(group_id, now, week_offset=0, start_month=9):
    """Расписание группы по её ID на неделю"""
    group = db.session.get(Group, group_id)
    if group is None:
        raise NotFoundError('Группа не найдена')
    week = compute_week(now, week_offset, start_month)
    result = week.to_dict()
    result['groupId'] = group.id
    result['group'] = group.name
    result['lessons'] = [lesson.to_dict() for lesson in _lessons_in_range(week, group_id=group.id)]
    return result


def read_teacher_schedule(teacher):
    """Все занятия преподавателя"""
    lessons = db.session.query(Lesson).filter_by(teacher_id=teacher.id).order_by(
        Lesson.lesson_date, Lesson.start_time
    ).all()
    result = []
    for lesson in lessons:
        item = lesson.to_dict()
        item['group_name'] = lesson.group.name
        result.append(item)
    return result
