from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.qr_payroll.qr_payroll.database.bootstrap import ensure_admin_user
from src.qr_payroll.qr_payroll.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the default super admin account if it does not exist.")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin123")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))

    created = ensure_admin_user(DatabaseConnection.get_instance(config), username=args.username, password=args.password)
    status = "created" if created else "already exists"
    print(f"OK: super admin {args.username!r} {status} -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
