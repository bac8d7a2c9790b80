"""Example: using the service layer without Flask.

Goal: show that controllers are a thin layer; the use cases live in services.
"""

import importlib

from config import get_settings_module

from src.roll_call.roll_call.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config={"url": settings.DATABASE_URL})
    session = container.session

    session.create_list("Example list")
    session.add_student("Ana", "García Pérez", national_id="12345678")
    print(session.summary())
    for n in container.notifications.pending():
        print(f"[{n.level.value}] {n.message}")


if __name__ == "__main__":
    main()
