"""
Бэкенд расписания занятий учебных групп
"""
from .app import create_app

__all__ = ['create_app']
