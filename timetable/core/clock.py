"""
Источник текущего времени сервера.

Провайдер задаётся в конфигурации (NOW_PROVIDER), чтобы расчёт недели и
проверка прошедших дат были детерминированы в тестах.
"""
from datetime import datetime

from flask import current_app


def get_now():
    """Текущее локальное время сервера"""
    provider = current_app.config.get('NOW_PROVIDER') or datetime.now
    return provider()


def get_today():
    """Текущий календарный день сервера (время обнулено)"""
    return get_now().date()
