"""
CRUD операции для учебных групп
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError

from timetable.core.auth import admin_required, current_user, login_required
from timetable.core.db_manager import db
from timetable.core.errors import ConflictError, NotFoundError, ValidationError
from timetable.models.system import Group
from timetable.routes.utils import get_json_body
from timetable.services.audit import log_change

logger = logging.getLogger(__name__)

groups_bp = Blueprint('groups', __name__)


def _groups_list():
    groups = db.session.query(Group).order_by(Group.name).all()
    return jsonify([group.to_dict() for group in groups])


@groups_bp.route('/groups')
@login_required
def groups_list():
    """Список групп"""
    return _groups_list()


@groups_bp.route('/admin/groups')
@admin_required
def admin_groups_list():
    return _groups_list()


@groups_bp.route('/admin/groups', methods=['POST'])
@admin_required
def create_group():
    """Создать группу"""
    data = get_json_body()
    name = str(data.get('name') or '').strip()
    if not name:
        raise ValidationError('Укажите название группы')

    if db.session.query(Group).filter_by(name=name).first():
        raise ConflictError('Группа с таким именем уже существует')

    group = Group(name=name)
    try:
        db.session.add(group)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Группа с таким именем уже существует')

    logger.info(f"Создана группа {name} (admin {current_user.id})")
    log_change(current_user.id, 'create_group', 'group', group.id, None, {'name': name})
    return jsonify(group.to_dict()), 201


@groups_bp.route('/admin/groups/<int:group_id>', methods=['DELETE'])
@admin_required
def delete_group(group_id):
    """Удалить группу вместе со всеми её занятиями и шаблонами"""
    group = db.session.get(Group, group_id)
    if group is None:
        raise NotFoundError('Группа не найдена')

    snapshot = group.to_dict()
    try:
        db.session.delete(group)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Удалена группа {snapshot['name']} (admin {current_user.id})")
    log_change(current_user.id, 'delete_group', 'group', group_id, snapshot, None)
    return jsonify({'success': True, 'message': 'Группа удалена'})
