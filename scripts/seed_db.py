from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from kita_admin.database.bootstrap import init_schema
from kita_admin.database.seeds import PROFILES, run_seed
from kita_admin.main import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Replace the Kita application data with a seed profile.")
    parser.add_argument("-p", "--profile", default=None, choices=sorted(PROFILES), help="seed profile (default: SEED_PROFILE)")
    args = parser.parse_args()

    app = create_app({"AUTO_SEED_DB": False})
    profile = args.profile or app.config.get("SEED_PROFILE", "demo")

    with app.app_context():
        init_schema()
        counts = run_seed(profile)

    summary = ", ".join(f"{kind}={n}" for kind, n in counts.items())
    print(f"OK: seeded profile '{profile}' ({summary})")


if __name__ == "__main__":
    main()
