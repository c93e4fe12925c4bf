"""Persist rule tables as zlib-compressed JSON."""

from __future__ import annotations

import json
import os
import tempfile
import zlib
from pathlib import Path

import structlog
from pydantic import ValidationError

from .errors import PersistenceError
from .models import RuleTable

log = structlog.get_logger()


def dumps(table: RuleTable) -> bytes:
    payload = json.dumps(table.to_serializable(), separators=(",", ":"))
    return zlib.compress(payload.encode("utf-8"))


def loads(data: bytes) -> RuleTable:
    try:
        payload = json.loads(zlib.decompress(data).decode("utf-8"))
    except zlib.error as e:
        raise PersistenceError(f"zlib error: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PersistenceError(f"json error: {e}") from e

    try:
        return RuleTable.from_serializable(payload)
    except ValidationError as e:
        raise PersistenceError(f"invalid rule table: {e}") from e


def save(table: RuleTable, path: str | Path) -> None:
    """Write ``table`` to ``path``, replacing any previous file atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(dumps(table))
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    log.info("rule_table_saved", path=str(path), release=table.release)


def load(path: str | Path) -> RuleTable:
    with open(path, "rb") as f:
        table = loads(f.read())
    log.info("rule_table_loaded", path=str(path), release=table.release, rules=table.rule_count)
    return table
