"""Roll call package.

Attendance rosters built from imported spreadsheets and manual entries,
organized by feature modules (importer, roster, summary, autosave, ...)
with a thin Flask controller layer over service/repository layers.
"""
