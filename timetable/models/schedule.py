"""
Модели расписания.

Lesson: занятие на конкретную календарную дату.
LessonTemplate: шаблон недельного расписания (день недели + чётность недели),
с которым работают массовые операции: копирование, очистка, замена преподавателя.
"""
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index

from timetable.core.db_manager import db

# Чётность недели для шаблонов
PARITY_ANY = 0
PARITY_EVEN = 1
PARITY_ODD = 2

PARITIES = {
    PARITY_ANY: 'каждая',
    PARITY_EVEN: 'чётная',
    PARITY_ODD: 'нечётная'
}

LESSON_TYPE_LECTURE = 'lecture'
LESSON_TYPE_PRACTICE = 'practice'

LESSON_TYPES = {
    LESSON_TYPE_LECTURE: 'Лекция',
    LESSON_TYPE_PRACTICE: 'Практика'
}


def format_time(value):
    """Время в виде HH:MM (секунды добавляются, только если они есть)"""
    if value is None:
        return None
    if value.second:
        return value.strftime('%H:%M:%S')
    return value.strftime('%H:%M')


class Lesson(db.Model):
    __tablename__ = 'lessons'
    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    lesson_date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)
    subject = db.Column(db.String(200), nullable=False)
    teacher_id = db.Column(db.Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    room = db.Column(db.String(50), nullable=False)
    type = db.Column(db.String(20), nullable=False)
    __table_args__ = (
        CheckConstraint('start_time < end_time', name='ck_lesson_time_order'),
        Index('ix_lessons_date_group', 'lesson_date', 'group_id'),
    )

    teacher = db.relationship('User', backref='lessons')

    def to_dict(self):
        return {
            'id': self.id,
            'group_id': self.group_id,
            'lesson_date': self.lesson_date.isoformat(),
            'day': self.lesson_date.weekday(),
            'start_time': format_time(self.start_time),
            'end_time': format_time(self.end_time),
            'subject': self.subject,
            'teacher_id': self.teacher_id,
            'teacher': self.teacher.full_name if self.teacher else None,
            'room': self.room,
            'type': self.type
        }


class LessonTemplate(db.Model):
    """Шаблон занятия недельного расписания"""
    __tablename__ = 'lesson_templates'
    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    day_of_week = db.Column(db.Integer, nullable=False)  # 0=Понедельник, 5=Суббота
    parity = db.Column(db.Integer, nullable=False, default=PARITY_ANY)  # 0=каждая, 1=чётная, 2=нечётная
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)
    subject = db.Column(db.String(200), nullable=False)
    teacher_id = db.Column(db.Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    teacher_name = db.Column(db.String(150), nullable=False, default='')
    room = db.Column(db.String(50), nullable=False)
    type = db.Column(db.String(20), nullable=False)
    __table_args__ = (
        CheckConstraint('start_time < end_time', name='ck_template_time_order'),
        Index('ix_templates_group_parity', 'group_id', 'parity'),
    )

    def copy_fields(self):
        """Поля шаблона без id и чётности для копирования на другую неделю"""
        return {
            'group_id': self.group_id,
            'day_of_week': self.day_of_week,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'subject': self.subject,
            'teacher_id': self.teacher_id,
            'teacher_name': self.teacher_name,
            'room': self.room,
            'type': self.type
        }

    def to_dict(self):
        return {
            'id': self.id,
            'group_id': self.group_id,
            'day': self.day_of_week,
            'week': self.parity,
            'start_time': format_time(self.start_time),
            'end_time': format_time(self.end_time),
            'subject': self.subject,
            'teacher_id': self.teacher_id,
            'teacher': self.teacher_name,
            'room': self.room,
            'type': self.type
        }


class ScheduleChange(db.Model):
    """Запись журнала изменений (только добавление, никогда не изменяется)"""
    __tablename__ = 'schedule_changes'
    id = db.Column(db.Integer, primary_key=True)
    admin_id = db.Column(db.Integer, ForeignKey('users.id'), nullable=False)
    action_type = db.Column(db.String(50), nullable=False)
    target_type = db.Column(db.String(50), nullable=False)
    target_id = db.Column(db.Integer, nullable=True)  # NULL для массовых операций
    old_value = db.Column(db.JSON, nullable=True)
    new_value = db.Column(db.JSON, nullable=True)
    changed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    admin = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'admin_id': self.admin_id,
            'admin_email': self.admin.email if self.admin else None,
            'action_type': self.action_type,
            'target_type': self.target_type,
            'target_id': self.target_id,
            'old_value': self.old_value,
            'new_value': self.new_value,
            'changed_at': self.changed_at.isoformat()
        }
