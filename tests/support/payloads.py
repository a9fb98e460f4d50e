from __future__ import annotations

import json
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def load_wikibase_payload(name: str) -> dict[str, object]:
    path = DATA_DIR / "wikibase" / f"{name}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def gtfs_fixture_dir(name: str) -> Path:
    return DATA_DIR / "gtfs" / name
