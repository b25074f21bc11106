"""Load seed orders (JSON array, legacy shapes accepted) into the orders document."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from order_dashboard.importer import import_orders  # noqa: E402
from order_dashboard.storage import get_store  # noqa: E402


def main() -> None:
    json_path = Path(sys.argv[1]) if len(sys.argv) > 1 else ROOT.parent / "data" / "orders_seed.json"
    if not json_path.exists():
        raise SystemExit(f"JSON file not found: {json_path}")

    stats = import_orders(get_store(), json_path)
    print(f"Created {stats.created} orders, skipped {stats.skipped} duplicates.")


if __name__ == "__main__":
    main()
