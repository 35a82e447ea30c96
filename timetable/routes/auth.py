"""
Аутентификация: вход, регистрация студента, выход
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError

from timetable.core.auth import current_user, login_required, login_user, logout_user
from timetable.core.db_manager import db
from timetable.core.errors import ConflictError, NotFoundError, ValidationError
from timetable.models.system import ROLE_STUDENT, Group, User
from timetable.routes.utils import get_json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/login', methods=['POST'])
def login():
    """Вход по email и паролю"""
    data = get_json_body()
    email = str(data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        raise ValidationError('Email и пароль обязательны')

    user = db.session.query(User).filter_by(email=email, is_active=True).first()
    if user is None or not user.check_password(password):
        logger.warning(f"Неудачная попытка входа: {email}")
        return jsonify({'success': False, 'error': 'Неверный email или пароль'}), 401

    login_user(user)
    logger.info(f"Пользователь {user.email} ({user.role}) вошёл в систему")
    return jsonify({'success': True, 'user': user.to_dict()})


@auth_bp.route('/register', methods=['POST'])
def register():
    """Регистрация нового студента в существующей группе"""
    data = get_json_body()
    email = str(data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    group_name = str(data.get('group_name') or data.get('groupName') or '').strip()
    full_name = str(data.get('full_name') or '').strip() or None

    if not email or not password or not group_name:
        raise ValidationError('Заполните все поля: email, password, group_name')

    group = db.session.query(Group).filter_by(name=group_name).first()
    if group is None:
        raise NotFoundError('Группа не найдена')

    if db.session.query(User).filter_by(email=email).first():
        raise ConflictError('Email уже занят')

    user = User(email=email, full_name=full_name, role=ROLE_STUDENT, group_id=group.id)
    user.set_password(password)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Email уже занят')

    logger.info(f"Зарегистрирован студент {email} в группе {group_name}")
    return jsonify({'success': True, 'message': 'Студент успешно зарегистрирован', 'user_id': user.id}), 201


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Выход из системы"""
    logout_user()
    return jsonify({'success': True})


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'success': True, 'user': current_user.to_dict()})
