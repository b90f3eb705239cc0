from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import FileParseError, FileReadError, MissingFileError, WriteError

PathLike = Union[str, Path]

LOCALE_SUFFIX = ".json"


def locale_file(locales_dir: PathLike, code: str) -> Path:
    """`<locales_dir>/<code>.json`"""
    return Path(locales_dir) / f"{code}{LOCALE_SUFFIX}"


def read_text_file(path: PathLike) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MissingFileError(p, f"File not found: {p}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(p, f"Failed to read {p}: {e}") from e


def read_json_file(path: PathLike) -> Dict[str, Any]:
    """
    Read a locale file.
    - missing file -> MissingFileError (callers decide whether that means "empty")
    - invalid JSON, or a root that is not an object -> FileParseError
    """
    p = Path(path)
    text = read_text_file(p)
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise FileParseError(p, f"Invalid JSON in {p}: {e}") from e
    if not isinstance(obj, dict):
        raise FileParseError(p, f"JSON root must be an object: {p}")
    return obj


def write_json_file(path: PathLike, data: Dict[str, Any]) -> None:
    """Pretty-print `data` (2-space indent, key order kept) and swap it into place."""
    p = Path(path)
    tmp = p.with_name(p.name + ".tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, p)
    except (OSError, TypeError, ValueError) as e:
        if tmp.exists():
            tmp.unlink()
        raise WriteError(p, f"Failed to write JSON to {p}: {e}") from e


def list_directory(path: PathLike) -> List[str]:
    p = Path(path)
    try:
        return sorted(c.name for c in p.iterdir())
    except FileNotFoundError:
        raise MissingFileError(p, f"Directory not found: {p}") from None
    except OSError as e:
        raise FileReadError(p, f"Failed to list directory {p}: {e}") from e
