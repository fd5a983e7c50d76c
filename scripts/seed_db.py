from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "dir_payroll"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from dir_payroll.database.bootstrap import ensure_admin_user

logger = logging.getLogger("dir_payroll.scripts.seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    email = getattr(settings, "ADMIN_EMAIL", "")
    password = getattr(settings, "ADMIN_PASSWORD", "")
    if not email or not password:
        raise SystemExit("Set ADMIN_EMAIL and ADMIN_PASSWORD to seed the admin account.")

    ensure_admin_user(dict(settings.DB_CONFIG), email=email.lower(), password=password)
    logger.info("Seeded admin account %s", email)


if __name__ == "__main__":
    main()
