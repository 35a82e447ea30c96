"""
Ошибки предметной области и их преобразование в JSON-ответы
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ScheduleError(Exception):
    """Базовая ошибка операций с расписанием"""
    status_code = 500
    default_message = 'Ошибка сервера'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AuthorizationError(ScheduleError):
    status_code = 403
    default_message = 'Доступ запрещён'


class ValidationError(ScheduleError):
    status_code = 400
    default_message = 'Некорректные данные'


class NotFoundError(ScheduleError):
    status_code = 404
    default_message = 'Не найдено'


class ConflictError(ScheduleError):
    status_code = 409
    default_message = 'Запись уже существует'


class InternalError(ScheduleError):
    status_code = 500


def register_error_handlers(app):
    """Регистрирует обработчики ошибок, возвращающие JSON вида {'success': False, 'error': ...}"""

    @app.errorhandler(ScheduleError)
    def handle_schedule_error(error):
        if error.status_code >= 500:
            logger.error(f"Внутренняя ошибка: {error.message}")
            return jsonify({'success': False, 'error': ScheduleError.default_message}), error.status_code
        return jsonify({'success': False, 'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        # Клиенту не отдаём ни трассировку, ни текст запроса
        logger.exception(f"Необработанная ошибка: {type(error).__name__}: {error}")
        return jsonify({'success': False, 'error': ScheduleError.default_message}), 500
