import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:////var/lib/roll_call/roll_call.db")

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

IMPORT_CROSS_ROSTER_DEDUP = bool(int(os.getenv("IMPORT_CROSS_ROSTER_DEDUP", "0")))

LOG_FILE = os.getenv("LOG_FILE") or None

DEBUG = False
