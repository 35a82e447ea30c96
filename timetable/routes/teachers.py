"""
Учётные записи преподавателей
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError

from timetable.core.auth import admin_required, current_user
from timetable.core.db_manager import db
from timetable.core.errors import ConflictError, ValidationError
from timetable.models.system import ROLE_TEACHER, User
from timetable.routes.utils import get_json_body
from timetable.services.audit import log_change

logger = logging.getLogger(__name__)

teachers_bp = Blueprint('teachers', __name__)


@teachers_bp.route('/admin/teachers')
@admin_required
def teachers_list():
    """Список преподавателей"""
    teachers = db.session.query(User).filter_by(role=ROLE_TEACHER).order_by(User.full_name).all()
    return jsonify([{'id': t.id, 'full_name': t.full_name, 'email': t.email} for t in teachers])


@teachers_bp.route('/admin/teachers', methods=['POST'])
@admin_required
def create_teacher():
    """Создать преподавателя"""
    data = get_json_body()
    email = str(data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    full_name = str(data.get('full_name') or '').strip()

    if not email or not password or not full_name:
        raise ValidationError('Все поля обязательны')

    if db.session.query(User).filter_by(email=email).first():
        raise ConflictError('Пользователь с таким email уже существует')

    teacher = User(email=email, full_name=full_name, role=ROLE_TEACHER)
    teacher.set_password(password)
    try:
        db.session.add(teacher)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Пользователь с таким email уже существует')

    logger.info(f"Создан преподаватель {email} (admin {current_user.id})")
    log_change(current_user.id, 'create_teacher', 'user', teacher.id, None,
               {'email': email, 'full_name': full_name})
    return jsonify({'id': teacher.id, 'email': teacher.email, 'full_name': teacher.full_name}), 201
