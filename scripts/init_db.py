"""Create the database named in DB_CONFIG and the tables the service needs.

Usage: APP_ENV=development python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.daysflow_hr.daysflow_hr.database.bootstrap import REQUIRED_TABLES, apply_schema, missing_tables


def main() -> int:
    settings_module = get_settings_module()
    db_config = importlib.import_module(settings_module).DB_CONFIG

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    missing = missing_tables(db_config)
    if missing:
        print(f"FAILED ({settings_module}): missing tables {', '.join(missing)}", file=sys.stderr)
        return 1

    print(f"OK ({settings_module}): {db_config['database']} has {', '.join(REQUIRED_TABLES)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
