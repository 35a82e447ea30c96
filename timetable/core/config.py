import os
from datetime import date

# BASE_DIR указывает на корень проекта (на уровень выше timetable/)
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))


def _env_date(name, default):
    """Читает дату в формате ISO (YYYY-MM-DD) из переменной окружения"""
    value = os.environ.get(name)
    if not value:
        return default
    return date.fromisoformat(value.strip())


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')

    # DATABASE_URL: стандарт для Render, Railway, Heroku; локально используем SQLite
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', f"sqlite:///{os.path.join(BASE_DIR, 'timetable.db')}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Адрес фронтенда для CORS (cookie сессии передаются с credentials)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000')

    # Границы семестра для генерации серий занятий
    SEMESTER_START = _env_date('SEMESTER_START', date(2023, 9, 1))
    SEMESTER_END = _env_date('SEMESTER_END', date(2023, 12, 31))

    # Учебный год начинается 1 сентября (месяц в нумерации Python, 1-12)
    ACADEMIC_YEAR_START_MONTH = 9

    # Источник текущего времени; None означает datetime.now
    NOW_PROVIDER = None

    AUDIT_HISTORY_LIMIT = 50

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
