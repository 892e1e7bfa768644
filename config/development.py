import os

from config import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Empty -> an ephemeral key is generated at startup (development only).
JWT_SECRET = os.getenv("JWT_SECRET", "")
REQUIRE_JWT_SECRET = False
TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "task_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

# The sign-up form offers the admin role; production turns this off.
ALLOW_ADMIN_REGISTRATION = env_flag("ALLOW_ADMIN_REGISTRATION", True)
EMPLOYEE_STATUS_ONLY_UPDATES = env_flag("EMPLOYEE_STATUS_ONLY_UPDATES", False)

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", True)
# Optional: also create/reset the bootstrap admin on startup
AUTO_SEED_ADMIN = env_flag("AUTO_SEED_ADMIN", False)
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
