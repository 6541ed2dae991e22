"""
Скрипт для инициализации базы данных.

Создаёт все таблицы напрямую через SQLAlchemy (без Alembic).
Строка подключения берётся из DATABASE_URL.
"""

import asyncio

from src.core.database import init_db


async def main():
    print("Создание таблиц...")
    await init_db()
    print("✓ Таблицы tasks, tags, task_tags созданы")


if __name__ == "__main__":
    asyncio.run(main())
