"""
Модуль авторизации для работы с Flask-Login
"""
from functools import wraps

from flask import jsonify
from flask_login import LoginManager, current_user, login_required, login_user, logout_user

from timetable.core.db_manager import db
from timetable.core.errors import AuthorizationError
from timetable.models.system import ROLE_ADMIN, ROLE_TEACHER, User

login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    """Загрузка пользователя для Flask-Login"""
    user = db.session.get(User, int(user_id))
    if user is None or not user.is_active:
        return None
    return user


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'success': False, 'error': 'Требуется авторизация'}), 401


def require_role(actor, *roles):
    """Проверяет роль пользователя внутри операции, а не только на уровне маршрута"""
    if actor is None or getattr(actor, 'role', None) not in roles:
        raise AuthorizationError('Доступ запрещён: недостаточно прав')


def require_admin(actor):
    require_role(actor, ROLE_ADMIN)


def role_required(*roles):
    """Декоратор для проверки роли текущего пользователя"""
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            require_role(current_user, *roles)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """Декоратор для проверки прав админа"""
    return role_required(ROLE_ADMIN)(f)


def teacher_required(f):
    return role_required(ROLE_TEACHER)(f)


__all__ = [
    'login_manager', 'login_required', 'admin_required', 'teacher_required',
    'role_required', 'require_admin', 'require_role',
    'login_user', 'logout_user', 'current_user'
]
