"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ACCEPTED_MEDIA_TYPES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/csv",
)
ACCEPTED_EXTENSIONS = (".xlsx", ".xls", ".csv")

# Row shape of an imported sheet: given name, second given name,
# family name, second family name.
IMPORT_MIN_CELLS = 4

MANUAL_ID_PREFIX = "manual"
IMPORT_ID_PREFIX = "excel"

STUDENTS_SHEET = "Students"
SUMMARY_SHEET = "Summary"
