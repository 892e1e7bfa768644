import os

from config import env_flag

SECRET_KEY = "test-secret"

JWT_SECRET = "test-jwt-secret-0123456789abcdefghij"
REQUIRE_JWT_SECRET = True
TOKEN_TTL_HOURS = 24
# bcrypt's minimum cost keeps the suite fast.
BCRYPT_ROUNDS = 4

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "task_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
PORT = 5000
CORS_ORIGINS = "*"

ALLOW_ADMIN_REGISTRATION = True
EMPLOYEE_STATUS_ONLY_UPDATES = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
AUTO_SEED_ADMIN = False
