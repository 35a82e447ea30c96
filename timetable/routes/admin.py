"""
Админские операции: занятия, шаблоны недели, массовые действия и история изменений
"""
from flask import Blueprint, current_app, jsonify, request

from timetable.core.auth import admin_required, current_user
from timetable.services import bulk_week
from timetable.services.audit import get_change_history
from timetable.services.lessons import create_lessons, delete_lesson, list_lessons
from timetable.services.templates import create_template, delete_template, list_templates
from timetable.routes.utils import get_int_arg, get_json_body, semester_bounds

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


# ================== ЗАНЯТИЯ ==================

@admin_bp.route('/lessons')
@admin_required
def lessons_list():
    """Занятия с фильтром по группе и диапазону дат (?groupId&start&end)"""
    return jsonify(list_lessons(
        group_id=request.args.get('groupId'),
        start=request.args.get('start'),
        end=request.args.get('end')
    ))


@admin_bp.route('/lessons', methods=['POST'])
@admin_required
def create_lesson():
    """Создать занятие (single_date) или серию на семестр (day + week)"""
    semester_start, semester_end = semester_bounds()
    ids = create_lessons(current_user, get_json_body(), semester_start, semester_end)
    return jsonify({'success': True, 'message': f'Создано {len(ids)} занятий', 'ids': ids}), 201


@admin_bp.route('/lessons/<int:lesson_id>', methods=['DELETE'])
@admin_required
def remove_lesson(lesson_id):
    delete_lesson(current_user, lesson_id)
    return jsonify({'success': True, 'message': 'Занятие удалено'})


# ================== ШАБЛОНЫ НЕДЕЛИ ==================

@admin_bp.route('/templates')
@admin_required
def templates_list():
    return jsonify(list_templates(
        group_id=request.args.get('groupId'),
        parity=request.args.get('week')
    ))


@admin_bp.route('/templates', methods=['POST'])
@admin_required
def add_template():
    template = create_template(current_user, get_json_body())
    return jsonify(template.to_dict()), 201


@admin_bp.route('/templates/<int:template_id>', methods=['DELETE'])
@admin_required
def remove_template(template_id):
    delete_template(current_user, template_id)
    return jsonify({'success': True, 'message': 'Шаблон удалён'})


# ================== МАССОВЫЕ ОПЕРАЦИИ ==================

@admin_bp.route('/lessons/copy-week', methods=['POST'])
@admin_required
def copy_week():
    """Скопировать шаблоны с одной недели на другую (0=каждая, 1=чётная, 2=нечётная)"""
    data = get_json_body()
    count = bulk_week.copy_week(current_user, data.get('group_id'), data.get('from_week'), data.get('to_week'))
    return jsonify({
        'success': True,
        'count': count,
        'message': f"Неделя скопирована (week {data.get('from_week')} → {data.get('to_week')})"
    })


@admin_bp.route('/lessons/clear-week', methods=['DELETE'])
@admin_required
def clear_week():
    data = get_json_body()
    count = bulk_week.clear_week(current_user, data.get('group_id'), data.get('week'))
    return jsonify({'success': True, 'count': count, 'message': f'Удалено {count} занятий'})


@admin_bp.route('/lessons/replace-teacher', methods=['PATCH'])
@admin_required
def replace_teacher():
    data = get_json_body()
    count = bulk_week.replace_teacher(
        current_user, data.get('group_id'), data.get('old_teacher'), data.get('new_teacher')
    )
    return jsonify({'success': True, 'count': count, 'message': f'Заменено {count} занятий'})


# ================== ИСТОРИЯ ИЗМЕНЕНИЙ ==================

@admin_bp.route('/changes')
@admin_required
def change_history():
    """История изменений (?limit=50&offset=0)"""
    limit = get_int_arg('limit', current_app.config.get('AUDIT_HISTORY_LIMIT', 50))
    offset = get_int_arg('offset', 0)
    return jsonify([change.to_dict() for change in get_change_history(limit, offset)])
