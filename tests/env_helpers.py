from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_FLAG_ENV = {
    "branch_diagnostics": "JDECODE_BRANCH_DIAGNOSTICS",
    "allow_nan": "JDECODE_ALLOW_NAN",
}


def _swap_env(values: dict[str, str | None]) -> dict[str, str | None]:
    previous = {key: os.environ.get(key) for key in values}
    for key, value in values.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    return previous


@contextmanager
def decode_env_scope(**flags: str | None) -> Iterator[None]:
    """Set JDECODE_* variables by settings name; unnamed flags are cleared."""
    values = {env: flags.get(name) for name, env in _FLAG_ENV.items()}
    previous = _swap_env(values)
    try:
        yield
    finally:
        _swap_env(previous)
