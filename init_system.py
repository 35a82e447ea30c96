"""
Скрипт инициализации системы с нуля
Создает таблицы БД и первого администратора
"""
import os

from timetable import create_app
from timetable.core.db_manager import db
from timetable.models.system import ROLE_ADMIN, User


def init_system():
    """Инициализировать систему с нуля"""

    print("=" * 60)
    print("ИНИЦИАЛИЗАЦИЯ СИСТЕМЫ")
    print("=" * 60)

    # Таблицы создаются внутри create_app
    app = create_app()

    with app.app_context():
        print("\n1. Создание администратора...")
        email = os.environ.get('ADMIN_EMAIL', 'admin@example.com').strip().lower()
        password = os.environ.get('ADMIN_PASSWORD', 'admin123')

        admin = db.session.query(User).filter_by(role=ROLE_ADMIN).first()
        if admin:
            print(f"   ⚠️  Администратор уже существует: {admin.email}")
        else:
            admin = User(
                email=email,
                full_name='Администратор',
                role=ROLE_ADMIN,
                is_active=True
            )
            admin.set_password(password)
            db.session.add(admin)
            db.session.commit()
            print("   ✅ Создан администратор:")
            print(f"      Email: {email}")
            print(f"      Пароль: {password}")
            print("      ⚠️  ВАЖНО: Измените пароль после первого входа!")

    print("\n" + "=" * 60)
    print("✅ ИНИЦИАЛИЗАЦИЯ ЗАВЕРШЕНА")
    print("=" * 60)


if __name__ == '__main__':
    init_system()
