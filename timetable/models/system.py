"""
Системные модели: учебные группы и пользователи (админы, преподаватели, студенты)
"""
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy import ForeignKey
from werkzeug.security import check_password_hash, generate_password_hash

from timetable.core.db_manager import db

ROLE_ADMIN = 'admin'
ROLE_TEACHER = 'teacher'
ROLE_STUDENT = 'student'

ROLES = {
    ROLE_ADMIN: 'Администратор',
    ROLE_TEACHER: 'Преподаватель',
    ROLE_STUDENT: 'Студент'
}


class Group(db.Model):
    """Учебная группа"""
    __tablename__ = 'groups'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    # Удаление группы удаляет её занятия и шаблоны
    lessons = db.relationship('Lesson', backref='group', lazy=True,
                              cascade='all, delete-orphan', passive_deletes=True)
    templates = db.relationship('LessonTemplate', backref='group', lazy=True,
                                cascade='all, delete-orphan', passive_deletes=True)
    students = db.relationship('User', backref='group', lazy=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f'<Group {self.name}>'


class User(UserMixin, db.Model):
    """Модель пользователя"""
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(150), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_STUDENT)
    group_id = db.Column(db.Integer, ForeignKey('groups.id', ondelete='SET NULL'), nullable=True)  # только для студентов
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        """Установить пароль"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Проверить пароль"""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role,
            'group_id': self.group_id,
            'group': self.group.name if self.group else None
        }

    def __repr__(self):
        return f'<User {self.email}>'
