"""Seed the entries table with a few sample rows."""
from __future__ import annotations

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.hookpress import create_app
from backend.hookpress.entries import EntryService, get_entry_store

SAMPLE_ENTRIES = [
    ("site_name", "hookpress demo"),
    ("ads_position", "after_content"),
    ("title_effect", "gradient"),
]


def main() -> None:
    app = create_app()
    with app.app_context():
        service = EntryService(get_entry_store())
        existing = {entry.fk for entry in service.list_entries()}

        created = 0
        for fk, fv in SAMPLE_ENTRIES:
            if fk in existing:
                continue
            service.create_entry(fk, fv)
            created += 1

        print("Seed completed", f"entries created={created}")


if __name__ == "__main__":
    main()
