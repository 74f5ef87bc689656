import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "daysflow_hr"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LEAVE_RECONCILE_MODE = os.getenv("LEAVE_RECONCILE_MODE", "best_effort")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
