"""
Общие фикстуры: приложение на SQLite в памяти, фиксированные часы и пользователи всех ролей
"""
from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy import event
from sqlalchemy.orm import Session

from timetable import create_app
from timetable.core.config import TestingConfig
from timetable.core.db_manager import db
from timetable.models.schedule import Lesson, LessonTemplate
from timetable.models.system import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER, Group, User

# Понедельник седьмой (нечётной) недели учебного года 2026/2027
FIXED_NOW = datetime(2026, 10, 19, 10, 0)

PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    app.config['NOW_PROVIDER'] = lambda: FIXED_NOW
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Контекст приложения для прямых вызовов сервисов"""
    with app.app_context():
        yield


@pytest.fixture
def seed(app):
    """Две группы, админ, два преподавателя и студент; возвращает их ID"""
    with app.app_context():
        group = Group(name='ИВТ-21')
        other_group = Group(name='ИВТ-22')
        db.session.add_all([group, other_group])
        db.session.flush()

        users = {
            'admin': User(email='admin@example.com', full_name='Администратор', role=ROLE_ADMIN),
            'teacher': User(email='ivanov@example.com', full_name='Иванов И.И.', role=ROLE_TEACHER),
            'other_teacher': User(email='petrov@example.com', full_name='Петров П.П.', role=ROLE_TEACHER),
            'student': User(email='student@example.com', full_name='Студент', role=ROLE_STUDENT,
                            group_id=group.id),
        }
        for user in users.values():
            user.set_password(PASSWORD)
            db.session.add(user)
        db.session.commit()

        return SimpleNamespace(
            group_id=group.id,
            other_group_id=other_group.id,
            admin_id=users['admin'].id,
            teacher_id=users['teacher'].id,
            other_teacher_id=users['other_teacher'].id,
            student_id=users['student'].id,
        )


def get_user(user_id):
    return db.session.get(User, user_id)


def login(client, email):
    response = client.post('/api/auth/login', json={'email': email, 'password': PASSWORD})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def admin_client(app, seed):
    client = app.test_client()
    login(client, 'admin@example.com')
    return client


@pytest.fixture
def teacher_client(app, seed):
    client = app.test_client()
    login(client, 'ivanov@example.com')
    return client


@pytest.fixture
def student_client(app, seed):
    client = app.test_client()
    login(client, 'student@example.com')
    return client


@pytest.fixture
def failing_insert():
    """
    Срывает вставку занятий или шаблонов на flush после armed = True.

    К этому моменту DELETE уже выполнен в транзакции; запоминается, сколько
    строк транзакция видела перед сбоем.
    """
    seen = SimpleNamespace(armed=False, error=RuntimeError('insert failed'), lessons=None, templates=None)

    def before_flush(session, flush_context, instances):
        if not seen.armed or not any(isinstance(obj, (Lesson, LessonTemplate)) for obj in session.new):
            return
        with session.no_autoflush:
            seen.lessons = session.query(Lesson).count()
            seen.templates = session.query(LessonTemplate).count()
        raise seen.error

    event.listen(Session, 'before_flush', before_flush)
    yield seen
    event.remove(Session, 'before_flush', before_flush)
