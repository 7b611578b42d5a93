"""JSON helpers backing the adjustment sidecar files."""

from __future__ import annotations

import json
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import SidecarInvalidError

_REPLACE_ATTEMPTS = 5


def read_json(path: Path) -> dict[str, Any]:
    """Return the JSON object stored in *path*.

    Raises
    ------
    SidecarInvalidError
        When the file is missing, is not valid JSON, or does not hold an
        object at the top level.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SidecarInvalidError(f"Sidecar not found: {path}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SidecarInvalidError(f"Invalid JSON data in {path}: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise SidecarInvalidError(f"Expected a JSON object in {path}")
    return payload


def atomic_write_text(path: Path, data: str) -> None:
    """Replace *path* with *data* without ever exposing a partial file.

    The text goes to a uniquely named temporary file in the same directory,
    which is then renamed over *path*.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        # Windows can hold a short lock on either file; the old sidecar stays
        # in place until a rename succeeds.
        for attempt in range(1, _REPLACE_ATTEMPTS + 1):
            try:
                tmp_path.replace(path)
                return
            except PermissionError:
                if attempt == _REPLACE_ATTEMPTS:
                    raise
                time.sleep(0.05 * attempt)
    finally:
        tmp_path.unlink(missing_ok=True)


def backup_file(path: Path, backup_dir: Path) -> Path | None:
    """Copy *path* into *backup_dir* under a timestamped name, if it exists."""

    if not path.exists():
        return None
    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    target = backup_dir / f"{path.stem}.{stamp}{path.suffix}"
    target.write_bytes(path.read_bytes())
    return target


def write_json(path: Path, data: dict[str, Any], *, backup_dir: Path | None = None) -> Path | None:
    """Store *data* in *path*, returning the backup of the previous file if one was made.

    Non-finite numbers are rejected rather than written as the non-standard
    ``NaN``/``Infinity`` tokens.
    """

    try:
        text = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True, allow_nan=False)
    except ValueError as exc:
        raise SidecarInvalidError(f"Cannot serialise sidecar for {path}: {exc}") from exc
    backup = backup_file(path, backup_dir) if backup_dir is not None else None
    atomic_write_text(path, text)
    return backup
