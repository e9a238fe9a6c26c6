"""Application constants.

Pagination defaults, email template fallbacks and storage identifiers.
"""

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_LIMIT: int = 100
MAX_PAGE_LIMIT: int = 1000

# ---------------------------------------------------------------------------
# Email templates
# ---------------------------------------------------------------------------
NAME_PLACEHOLDER: str = "{{name}}"
DEFAULT_EMAIL_SUBJECT: str = "Hello {{name}}"
DEFAULT_EMAIL_TEMPLATE: str = "Dear {{name}},\n\nBest regards"
DEFAULT_FROM_NAME: str = "Talent Management"
SMTP_SSL_PORT: int = 465
SMTP_SUBMISSION_PORT: int = 587

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------
TALENTS_TABLE: str = "talents"
SETTINGS_TABLE: str = "settings"
USERS_TABLE: str = "users"

# The settings table holds exactly one row under this primary key
SETTINGS_ROW_ID: int = 1

# PostgreSQL unique_violation
PG_UNIQUE_VIOLATION: str = "23505"
