"""
Фабрика Flask приложения
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from timetable.core.auth import login_manager
from timetable.core.config import Config
from timetable.core.db_manager import init_db
from timetable.core.errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Создать и настроить приложение"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Настройка логирования
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    origins = [o.strip() for o in str(app.config.get('CORS_ORIGINS', '')).split(',') if o.strip()]
    CORS(app, origins=origins, supports_credentials=True)

    init_db(app)

    # login_manager должен быть инициализирован после init_db
    login_manager.init_app(app)

    register_error_handlers(app)

    from timetable.routes import api_bp
    app.register_blueprint(api_bp)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    logger.info(f"Приложение запущено (CORS: {', '.join(origins) or '-'})")
    return app
