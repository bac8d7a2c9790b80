from __future__ import annotations

from dataclasses import dataclass

from .core.constants import MAX_UPLOAD_BYTES
from .database.connection import DatabaseConnection, DBConfig
from .export.service import ExportService
from .importer.service import ImportService
from .notifications.center import NotificationCenter
from .roster.service import RosterService
from .roster.sql_roster_repository import SqlRosterRepository
from .session.service import AttendanceSession


@dataclass(frozen=True)
class Container:
    db: DatabaseConnection

    rosters_repo: SqlRosterRepository
    notifications: NotificationCenter

    roster_service: RosterService
    import_service: ImportService
    export_service: ExportService
    session: AttendanceSession


def build_container(*, db_config: dict) -> Container:
    db = DatabaseConnection.get_instance(DBConfig(url=db_config["url"]))

    rosters_repo = SqlRosterRepository(db)
    notifications = NotificationCenter()

    roster_service = RosterService()
    import_service = ImportService(
        max_bytes=int(db_config.get("max_upload_bytes", MAX_UPLOAD_BYTES)),
        cross_roster=bool(db_config.get("cross_roster_dedup", False)),
    )
    export_service = ExportService()
    session = AttendanceSession(
        rosters_repo,
        notifications,
        rosters=roster_service,
        importer=import_service,
    )
    session.load_lists()

    return Container(
        db=db,
        rosters_repo=rosters_repo,
        notifications=notifications,
        roster_service=roster_service,
        import_service=import_service,
        export_service=export_service,
        session=session,
    )
