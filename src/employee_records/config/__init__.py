import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "employee_records.config.production"

    if env in {"test", "testing"}:
        return "employee_records.config.testing"

    return "employee_records.config.development"


def db_config_from_env(*, default_password: str = "") -> dict:
    """Build the mysql-connector settings dict from DB_* variables."""
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USERNAME", os.getenv("DB_USER", "root")),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "ems"),
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
    }
