import os
import tempfile

SECRET_KEY = "test-secret"

DATABASE_URL = os.getenv(
    "DATABASE_URL", "sqlite:///" + os.path.join(tempfile.gettempdir(), "roll_call_test.db")
)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

IMPORT_CROSS_ROSTER_DEDUP = False

LOG_FILE = None

DEBUG = False
TESTING = True
