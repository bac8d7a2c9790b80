from __future__ import annotations

import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file
from werkzeug.utils import secure_filename

from ..common.datetime_utils import to_iso
from ..container import Container
from ..core.enums import SortField
from ..core.exceptions import (
    DomainError,
    ExportError,
    ImportParseError,
    NoActiveRosterError,
    UnsavedChangesError,
    ValidationError,
)
from ..export.service import XLSX_MEDIA_TYPE
from ..roster.model import Roster, Student
from ..summary.model import AttendanceSummary

logger = logging.getLogger(__name__)


def student_json(s: Student) -> dict:
    return {
        "id": s.student_id,
        "given_name": s.given_name,
        "family_name": s.family_name,
        "national_id": s.national_id,
        "phone": s.phone,
        "present": s.present,
        "is_manual": s.is_manual,
        "created_at": to_iso(s.created_at),
    }


def roster_json(r: Roster, *, with_students: bool = True) -> dict:
    out = {
        "id": r.roster_id,
        "name": r.name,
        "created_at": to_iso(r.created_at),
        "modified_at": to_iso(r.modified_at),
        "student_count": len(r.students),
    }
    if with_students:
        out["students"] = [student_json(s) for s in r.students]
    return out


def summary_json(s: AttendanceSummary) -> dict:
    return {
        "total": s.total,
        "present": s.present,
        "absent": s.absent,
        "present_from_import": s.present_from_import,
        "present_manual": s.present_manual,
        "absent_from_import": s.absent_from_import,
        "absent_manual": s.absent_manual,
    }


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _stream_size(stream) -> int:
    position = stream.tell()
    stream.seek(0, io.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def register(app: Flask, container: Container) -> None:
    session = container.session

    def json_errors(view):
        """Translate domain errors into JSON responses."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (NoActiveRosterError, UnsavedChangesError) as e:
                return _fail(str(e), 409)
            except (ValidationError, ImportParseError) as e:
                return _fail(str(e), 400)
            except ExportError as e:
                return _fail(str(e), 500)
            except DomainError as e:
                return _fail(str(e), 400)
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return _fail("Internal system error", 500)

        return wrapper

    def current_state() -> dict:
        roster = session.current
        return {
            "success": True,
            "list": roster_json(roster) if roster else None,
            "summary": summary_json(session.summary()),
            "unsaved_changes": session.has_unsaved_changes,
        }

    @app.route("/api/lists", methods=["GET"], endpoint="lists")
    @json_errors
    def lists():
        return jsonify({"success": True, "lists": [roster_json(r, with_students=False) for r in session.all_lists]})

    @app.route("/api/lists", methods=["POST"], endpoint="create_list")
    @json_errors
    def create_list():
        data = request.get_json(silent=True) or {}
        confirmed = bool(data.get("confirm", False))
        roster = session.create_list(str(data.get("name", "")), confirm=lambda: confirmed)
        if roster is None:
            return _fail("Error creating the list", 500)
        return jsonify(current_state()), 201

    @app.route("/api/lists/<roster_id>/select", methods=["POST"], endpoint="select_list")
    @json_errors
    def select_list(roster_id: str):
        data = request.get_json(silent=True) or {}
        confirmed = bool(data.get("confirm", False))
        if not any(r.roster_id == roster_id for r in session.all_lists):
            return _fail("List not found", 404)
        if not session.select_list(roster_id, confirm=lambda: confirmed):
            return _fail("You have unsaved changes. Confirm to switch lists anyway", 409)
        return jsonify(current_state())

    @app.route("/api/lists/<roster_id>", methods=["DELETE"], endpoint="delete_list")
    @json_errors
    def delete_list(roster_id: str):
        if not session.delete_list(roster_id):
            return _fail("Error deleting the list", 500)
        return jsonify({"success": True})

    @app.route("/api/current", methods=["GET"], endpoint="current")
    @json_errors
    def current():
        return jsonify(current_state())

    @app.route("/api/current/summary", methods=["GET"], endpoint="current_summary")
    @json_errors
    def current_summary():
        return jsonify({"success": True, "summary": summary_json(session.summary())})

    @app.route("/api/current/import", methods=["POST"], endpoint="import_file")
    @json_errors
    def import_file():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return _fail("No file was sent", 400)

        file_name = secure_filename(upload.filename) or upload.filename
        # Type and size are checked before the content is read into memory.
        session.check_upload(file_name=file_name, media_type=upload.mimetype, size=_stream_size(upload.stream))

        cross_roster = request.form.get("cross_roster")
        result = session.import_file(
            upload.read(),
            file_name=file_name,
            media_type=upload.mimetype,
            cross_roster=None if cross_roster is None else cross_roster.lower() in {"1", "true", "yes", "on"},
        )
        state = current_state()
        state["imported"] = len(result.students)
        state["duplicates_found"] = result.duplicates_found
        return jsonify(state)

    @app.route("/api/current/students", methods=["GET"], endpoint="students")
    @json_errors
    def students():
        try:
            sort_by = SortField(request.args.get("sort", SortField.FAMILY_NAME.value))
        except ValueError:
            return _fail("Unknown sort field", 400)
        descending = request.args.get("order", "asc").lower() == "desc"
        rows = session.students(term=request.args.get("q", ""), sort_by=sort_by, descending=descending)
        return jsonify({"success": True, "students": [student_json(s) for s in rows]})

    @app.route("/api/current/students", methods=["POST"], endpoint="add_student")
    @json_errors
    def add_student():
        data = request.get_json(silent=True) or {}
        student = session.add_student(
            str(data.get("given_name", "")),
            str(data.get("family_name", "")),
            data.get("national_id"),
            data.get("phone"),
        )
        state = current_state()
        state["student"] = student_json(student)
        return jsonify(state), 201

    @app.route("/api/current/students/<student_id>/toggle", methods=["POST"], endpoint="toggle_attendance")
    @json_errors
    def toggle_attendance(student_id: str):
        session.toggle_attendance(student_id)
        return jsonify(current_state())

    @app.route("/api/current/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @json_errors
    def delete_student(student_id: str):
        session.delete_student(student_id)
        return jsonify(current_state())

    @app.route("/api/current/save", methods=["POST"], endpoint="save")
    @json_errors
    def save():
        if session.current is None:
            raise NoActiveRosterError("You must first create or select a list")
        if not session.manual_save():
            return _fail("Error saving the list", 500)
        return jsonify(current_state())

    @app.route("/api/current/export.xlsx", methods=["GET"], endpoint="export_xlsx")
    @json_errors
    def export_xlsx():
        roster = session.current
        if roster is None:
            raise NoActiveRosterError("You must first create or select a list")

        data = container.export_service.build(roster.students, session.summary(), roster.name)
        content = container.export_service.write_workbook(data)
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MEDIA_TYPE,
            as_attachment=True,
            download_name=data.file_name,
        )
