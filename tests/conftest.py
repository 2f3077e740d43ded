from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest


@pytest.fixture
def write_declaration_payload():
    def _write(path: Path, payload: dict[str, object]) -> Path:
        path.write_text(
            json.dumps(payload, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def user_payload() -> dict[str, object]:
    return {
        "kind": "struct",
        "name": "User",
        "location": {"path": "User.swift", "line": 1, "column": 1},
        "members": [
            {"kind": "let", "bindings": [{"pattern": "id", "type": "String"}]},
            {"kind": "let", "bindings": [{"pattern": "age", "type": "Int"}]},
            {"kind": "let", "bindings": [{"pattern": "isAdmin", "type": "Bool"}]},
        ],
    }
