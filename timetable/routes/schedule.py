"""
Просмотр расписания (неделя, день) и полная перезапись расписания дня
"""
from flask import Blueprint, jsonify, request

from timetable.core.auth import current_user, login_required, teacher_required
from timetable.core.clock import get_now, get_today
from timetable.core.errors import ValidationError
from timetable.services.day_schedule import get_day, replace_day
from timetable.services.lesson_fields import parse_optional_int
from timetable.services.schedule_reader import read_group_week, read_teacher_schedule, read_week_schedule
from timetable.routes.utils import academic_start_month, get_json_body, get_week_offset

schedule_bp = Blueprint('schedule', __name__)


@schedule_bp.route('/schedule')
@login_required
def week_schedule():
    """Расписание на неделю для текущего пользователя (?weekOffset=0&group=...)"""
    result = read_week_schedule(
        current_user,
        get_now(),
        week_offset=get_week_offset(),
        group_name=(request.args.get('group') or '').strip() or None,
        start_month=academic_start_month()
    )
    return jsonify(result)


@schedule_bp.route('/schedule/week')
@login_required
def group_week_schedule():
    """Расписание группы на неделю (?groupId=...&weekOffset=0)"""
    group_id = parse_optional_int(request.args.get('groupId'), 'groupId')
    if group_id is None:
        raise ValidationError('groupId обязателен')
    result = read_group_week(group_id, get_now(), get_week_offset(), academic_start_month())
    return jsonify(result)


@schedule_bp.route('/schedule/day')
@login_required
def day_schedule():
    """Расписание группы на день (?date=YYYY-MM-DD&groupId=...)"""
    lesson_date = request.args.get('date')
    group_id = request.args.get('groupId')
    if not lesson_date or not group_id:
        raise ValidationError('date и groupId обязательны')
    return jsonify(get_day(lesson_date, group_id))


@schedule_bp.route('/schedule/day', methods=['PUT'])
@login_required
def update_day_schedule():
    """Полная перезапись расписания на конкретный день (только admin)"""
    data = get_json_body()
    result = replace_day(
        current_user,
        data.get('date'),
        data.get('groupId'),
        data.get('lessons'),
        today=get_today()
    )
    result['success'] = True
    result['message'] = 'Расписание на день успешно сохранено'
    return jsonify(result)


@schedule_bp.route('/teacher/schedule')
@teacher_required
def teacher_schedule():
    """Все занятия текущего преподавателя"""
    return jsonify(read_teacher_schedule(current_user))
