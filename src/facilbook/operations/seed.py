"""Apply the schema and seed the facility catalog without starting the API.

Usage: DATABASE_URL=... facilbook-seed
"""

import sys

from facilbook.api.factory import bootstrap
from facilbook.config import Settings
from facilbook.infra.db import Store


def main() -> int:
    settings = Settings.from_env()
    if not settings.database_url:
        print("Missing env var: DATABASE_URL", file=sys.stderr)
        return 2

    store = Store.from_settings(settings)
    store.open()
    try:
        bootstrap(store, settings)
    finally:
        store.close()

    print("schema applied; facility seed done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
