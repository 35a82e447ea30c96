"""
Модели приложения
"""
from timetable.models.system import Group, User, ROLE_ADMIN, ROLE_TEACHER, ROLE_STUDENT, ROLES
from timetable.models.schedule import (
    Lesson, LessonTemplate, ScheduleChange,
    PARITY_ANY, PARITY_EVEN, PARITY_ODD, PARITIES,
    LESSON_TYPE_LECTURE, LESSON_TYPE_PRACTICE, LESSON_TYPES
)

__all__ = [
    # System models
    'Group', 'User', 'ROLE_ADMIN', 'ROLE_TEACHER', 'ROLE_STUDENT', 'ROLES',
    # Schedule models
    'Lesson', 'LessonTemplate', 'ScheduleChange',
    'PARITY_ANY', 'PARITY_EVEN', 'PARITY_ODD', 'PARITIES',
    'LESSON_TYPE_LECTURE', 'LESSON_TYPE_PRACTICE', 'LESSON_TYPES'
]
