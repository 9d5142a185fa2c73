import json
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")

_WRITE_LOCK = threading.Lock()


def read_json_list(path: Path) -> list[dict[str, Any]]:
    """Missing or blank files read as an empty list."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    if not text.strip():
        return []

    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a JSON array")
    return data


def write_json_list(path: Path, items: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(json.dumps(items, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    os.replace(tmp_path, path)


class JsonListFile:
    """A JSON array on disk, updated read-modify-write under a process-wide lock."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[dict[str, Any]]:
        return read_json_list(self.path)

    def append(self, item: dict[str, Any]) -> None:
        with _WRITE_LOCK:
            items = read_json_list(self.path)
            items.append(item)
            write_json_list(self.path, items)

    def update(self, mutate: Callable[[list[dict[str, Any]]], T]) -> T:
        """Apply ``mutate(items)`` and persist; returns what ``mutate`` returns."""
        with _WRITE_LOCK:
            items = read_json_list(self.path)
            result = mutate(items)
            write_json_list(self.path, items)
            return result
