from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from sqlalchemy.engine import make_url

from kita_admin.database.bootstrap import ensure_admin, ensure_database_exists, init_schema, list_tables
from kita_admin.main import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Kita database tables (idempotent).")
    parser.add_argument("--admin-email", help="also create or reset this admin account")
    parser.add_argument("--admin-password", help="password for --admin-email")
    parser.add_argument("--admin-name", default="Administrator")
    args = parser.parse_args()

    if args.admin_email and not args.admin_password:
        parser.error("--admin-password is required with --admin-email")

    app = create_app({"AUTO_INIT_DB": False, "AUTO_SEED_DB": False})
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    ensure_database_exists(uri)

    with app.app_context():
        init_schema()
        tables = list_tables()
        if args.admin_email:
            ensure_admin(args.admin_email, args.admin_password, args.admin_name)

    print(f"OK: schema ready -> {make_url(uri).render_as_string(hide_password=True)} (tables={len(tables)})")


if __name__ == "__main__":
    main()
