"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import TaskStatus

DEFAULT_TOKEN_TTL_HOURS = 24
DEFAULT_BCRYPT_ROUNDS = 12
JWT_ALGORITHM = "HS256"

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72

DAY_KEY_FORMAT = "%Y-%m-%d"

# Column widths in database/schema.sql (characters).
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 200
TASK_TYPE_MAX_LENGTH = 100
# TEXT holds 65535 bytes; utf8mb4 needs up to 4 per character.
DESCRIPTION_MAX_LENGTH = 16000

# HS256 keys shorter than the digest size are refused in production.
MIN_JWT_SECRET_BYTES = 32

PENDING_TASK_STATUSES = (TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS)
