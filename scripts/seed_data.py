#!/usr/bin/env python3
"""
Seed script: наполняет запущенный API демонстрационными задачами и тегами.

Запуск:
    uvicorn src.main:app &
    python scripts/seed_data.py
"""

import sys

import requests

API_URL = "http://localhost:8000"
HEADERS = {"Content-Type": "application/json"}

TASKS = [
    {
        "taskName": "api",
        "title": "Спроектировать REST API для задач",
        "priority": "high",
        "status": "in_progress",
        "tags": [{"name": "backend"}, {"name": "design"}],
    },
    {
        "taskName": "migrations",
        "title": "Настроить Alembic миграции",
        "priority": "medium",
        "status": "todo",
        "tags": [{"name": "backend"}, {"name": "database"}],
    },
    {
        "taskName": "tests",
        "title": "Покрыть endpoints тестами",
        "priority": "medium",
        "status": "todo",
        "tags": [{"name": "testing"}],
    },
    {
        "taskName": "docs",
        "title": "Описать формат ответа в README",
        "priority": "low",
        "status": "done",
        "tags": [{"name": "docs"}],
    },
]


def create_task(payload: dict, known_tags: dict[str, str]) -> dict:
    """
    Создать задачу через POST /tasks/create.

    Имена тегов, уже созданных этим скриптом, передаются с их id,
    чтобы не плодить дубликаты (имена тегов в API не уникальны).
    """
    tags = [
        {"id": known_tags[t["name"]], "name": t["name"]} if t["name"] in known_tags else t
        for t in payload["tags"]
    ]
    response = requests.post(
        f"{API_URL}/tasks/create", json={**payload, "tags": tags}, headers=HEADERS, timeout=10
    )
    response.raise_for_status()
    return response.json()["data"]


def main() -> int:
    known_tags: dict[str, str] = {}

    for payload in TASKS:
        try:
            task = create_task(payload, known_tags)
        except requests.RequestException as e:
            print(f"✗ {payload['taskName']}: {e}")
            return 1

        for tag in task["tags"]:
            known_tags[tag["name"]] = tag["id"]
        print(f"✓ {task['name']} ({', '.join(t['name'] for t in task['tags'])})")

    print(f"\nСоздано задач: {len(TASKS)}, тегов: {len(known_tags)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
