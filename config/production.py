import os

from config import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

JWT_SECRET = os.getenv("JWT_SECRET", "")
REQUIRE_JWT_SECRET = True
TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "task_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

ALLOW_ADMIN_REGISTRATION = env_flag("ALLOW_ADMIN_REGISTRATION", False)
EMPLOYEE_STATUS_ONLY_UPDATES = env_flag("EMPLOYEE_STATUS_ONLY_UPDATES", False)

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", False)
AUTO_SEED_ADMIN = env_flag("AUTO_SEED_ADMIN", False)
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
