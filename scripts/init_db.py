from __future__ import annotations

import argparse
import importlib
import logging

from dotenv import load_dotenv

from employee_records.config import get_settings_module
from employee_records.database.bootstrap import list_tables, run_bootstrap


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or repair the employees table.")
    parser.add_argument("--no-seed", action="store_true", help="skip sample employees")
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not run_bootstrap(db_config, seed=not args.no_seed):
        raise SystemExit("Database bootstrap finished with errors (see log above).")

    tables = list_tables(db_config)
    print(
        "OK: employees table ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
