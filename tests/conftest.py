from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from jdecode.config import DecodeSettings, settings_scope
from tests.env_helpers import decode_env_scope as _decode_env_scope


@pytest.fixture(autouse=True)
def _default_settings_scope():
    with settings_scope(DecodeSettings()):
        yield


@pytest.fixture
def decode_env():
    return _decode_env_scope


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(text: str, *, name: str = "jdecode.toml") -> Path:
        path = tmp_path / name
        path.write_text(text.strip() + "\n", encoding="utf-8")
        return path

    return _write
