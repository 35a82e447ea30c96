"""
Регистрация всех маршрутов приложения
"""
from flask import Blueprint

# Главный Blueprint для API маршрутов
api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import admin, auth, groups, schedule, teachers  # noqa: E402

api_bp.register_blueprint(auth.auth_bp)
api_bp.register_blueprint(groups.groups_bp)
api_bp.register_blueprint(schedule.schedule_bp)
api_bp.register_blueprint(teachers.teachers_bp)
api_bp.register_blueprint(admin.admin_bp)

__all__ = ['api_bp']
