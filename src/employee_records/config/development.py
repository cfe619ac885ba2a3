import os

from . import db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Startup schema reconciliation (CREATE/ALTER TABLE employees)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Sample employees when the table is empty
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
