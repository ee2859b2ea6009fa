from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timecard_system.timecard_system.core.logging import configure_logging, get_logger
from src.timecard_system.timecard_system.database.bootstrap import apply_seed_sql

log = get_logger("scripts.seed_db")


def main() -> None:
    configure_logging("INFO")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    log.info(
        "demo_tenant_seeded",
        tenant="org_demo",
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
    )


if __name__ == "__main__":
    main()
