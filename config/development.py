import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_timesheet"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Demo accounts log in with any password
ENABLE_DEMO_LOGIN = bool(int(os.getenv("ENABLE_DEMO_LOGIN", "1")))
# Weekly grid filled with generated placeholder cells instead of time entries
DEMO_ATTENDANCE = bool(int(os.getenv("DEMO_ATTENDANCE", "0")))

# Monday=0 .. Sunday=6
WEEK_ANCHOR_WEEKDAY = int(os.getenv("WEEK_ANCHOR_WEEKDAY", "2"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
