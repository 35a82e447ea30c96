"""
Менеджер базы данных: один экземпляр SQLAlchemy на процесс и транзакции поверх его сессии
"""
import logging
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from timetable.core.errors import InternalError

logger = logging.getLogger(__name__)

# Пул соединений живёт внутри engine этого экземпляра и создаётся при init_db
db = SQLAlchemy()


@event.listens_for(Engine, 'connect')
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Включает проверку внешних ключей для SQLite (иначе ON DELETE CASCADE не работает)"""
    if type(dbapi_connection).__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def init_db(app):
    """Инициализировать БД приложения и создать недостающие таблицы"""
    db.init_app(app)

    # Импорт моделей регистрирует таблицы в metadata
    from timetable import models  # noqa: F401

    with app.app_context():
        db.create_all()
    logger.info(f"БД инициализирована: {app.config['SQLALCHEMY_DATABASE_URI']}")


@contextmanager
def transaction():
    """
    Транзакция на сессии текущего запроса.

    Все операции внутри блока идут через одно соединение: commit при успехе,
    rollback и повторный выброс исключения при ошибке. Ошибки самой БД
    превращаются в InternalError, причина остаётся в логе. Соединение возвращается
    в пул при завершении транзакции в обоих случаях.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Ошибка БД, транзакция откачена: {type(e).__name__}: {e}")
        raise InternalError('Ошибка базы данных') from e
    except Exception:
        session.rollback()
        raise
