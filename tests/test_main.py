from __future__ import annotations

import mysql.connector

from employee_records import main
from employee_records.config import db_config_from_env, get_settings_module
from employee_records.database import bootstrap
from employee_records.main import create_app


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "employee_records.config.production"

    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "employee_records.config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "employee_records.config.development"


def test_db_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "mysql.internal")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_USERNAME", "ems_app")
    monkeypatch.setenv("DB_NAME", "ems_prod")

    config = db_config_from_env()

    assert config["host"] == "mysql.internal"
    assert config["port"] == 3307
    assert config["user"] == "ems_app"
    assert config["database"] == "ems_prod"


def test_app_starts_when_bootstrap_cannot_reach_database(monkeypatch):
    calls = []

    def refuse(**kwargs):
        calls.append(kwargs)
        raise mysql.connector.Error(msg="Can't connect to MySQL server")

    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("AUTO_INIT_DB", "1")
    monkeypatch.setattr(bootstrap.mysql.connector, "connect", refuse)

    app = create_app()

    assert calls
    assert "api_list_employees" in app.view_functions
    assert "employees_list" in app.view_functions


def test_app_starts_when_table_listing_fails_after_bootstrap(monkeypatch):
    def refuse(db_config):
        raise mysql.connector.Error(msg="Lost connection to MySQL server")

    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("AUTO_INIT_DB", "1")
    monkeypatch.setattr(main, "run_bootstrap", lambda db_config, seed: True)
    monkeypatch.setattr(main, "list_tables", refuse)

    app = create_app()

    assert "api_health" in app.view_functions
