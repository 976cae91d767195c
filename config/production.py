import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_timesheet"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Never configurable here: production only accepts real accounts and real time entries.
ENABLE_DEMO_LOGIN = False
DEMO_ATTENDANCE = False

WEEK_ANCHOR_WEEKDAY = int(os.getenv("WEEK_ANCHOR_WEEKDAY", "2"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
