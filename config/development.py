import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# SQLite file holding every attendance list
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///instance/roll_call.db")

# Uploads above this size are rejected before being read (10 MiB)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# Also drop imported rows already present on the target list
IMPORT_CROSS_ROSTER_DEDUP = bool(int(os.getenv("IMPORT_CROSS_ROSTER_DEDUP", "0")))

LOG_FILE = os.getenv("LOG_FILE", "logs/roll_call.log")

DEBUG = True
