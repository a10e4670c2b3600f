# splicer/io_utils.py
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union


PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    """
    Deterministic text reader (fail-closed).
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Source file not found: {p}")
    return p.read_text(encoding="utf-8")


def read_json(path: PathLike) -> Any:
    """
    Deterministic JSON reader (fail-closed).
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"JSON file not found: {p}")
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {p}: {e}") from e


def write_json(path: PathLike, obj: Any) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(obj, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_text_atomic(path: PathLike, text: str) -> None:
    """
    Write text so that readers only ever see the old file or the complete new one.

    The temporary file lives in the destination directory so os.replace stays
    on one filesystem.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, p)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
