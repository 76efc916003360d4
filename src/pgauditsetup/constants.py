"""Fixed paths, packages and settings used by pgaudit-setup."""

DEFAULT_USER = "postgres"
DEFAULT_DATABASE = "postgres"
DEFAULT_PASSWORD = "postgres"
DEFAULT_POSTGRES_VERSION = "17"
DEFAULT_RESTART_DELAY = 5.0
DEFAULT_CUSTOM_CONFIG = "./db/custom-postgresql.conf"
DEFAULT_CONFIG_FILE = ".pgaudit-setup.yml"

LOGS_DIR = "logs"
BACKUPS_DIR = "backups"
LOG_FILE_PREFIX = "pgaudit-setup"
BACKUP_FILE_PREFIX = "postgresql.conf"

CONTAINER_CONF_PATH = "/var/lib/postgresql/data/postgresql.conf"
CONTAINER_CUSTOM_CONF_PATH = "/etc/postgresql/custom-postgresql.conf"

PGAUDIT_REPOSITORY = "https://github.com/pgaudit/pgaudit.git"
PGAUDIT_CHECKOUT_DIR = "/tmp/pgaudit"

BUILD_PACKAGES = (
    "git",
    "build-essential",
    "postgresql-server-dev-{postgres_version}",
    "ca-certificates",
    "libpq-dev",
    "libkrb5-dev",
)

AUDIT_SETTINGS = (
    ("pgaudit.log", "'all'"),
    ("pgaudit.log_parameter", "on"),
    ("pgaudit.role", "'postgres'"),
)

PASSWORD_ENV_VAR = "PGPASSWORD"
DOCKER_PS_FORMAT = "{{.ID}} {{.Names}}"
