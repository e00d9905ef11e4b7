import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Organisation local time; schedules and day boundaries are evaluated here
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")

# Seconds a schedule/location/settings read stays cached
CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "30"))

# Used when neither the office nor system_settings defines a radius
DEFAULT_GPS_RADIUS = int(os.getenv("DEFAULT_GPS_RADIUS", "3000"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
