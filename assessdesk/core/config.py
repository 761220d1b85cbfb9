import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./assessdesk.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "1") == "1"

# ✅ API
API_PREFIX = os.getenv("API_PREFIX", "/api")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")
