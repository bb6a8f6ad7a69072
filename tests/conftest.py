"""Shared fixtures."""

from __future__ import annotations

from typing import Dict

import pytest

from xml_json.errors import FileAccessError


class MemoryFileStore:
    """FileStore that keeps files in a dict."""

    def __init__(self) -> None:
        self.files: Dict[str, bytes] = {}

    def read(self, path) -> bytes:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileAccessError(f"No such file: {path}", path=str(path)) from None

    def write(self, path, content: bytes) -> None:
        self.files[str(path)] = content


@pytest.fixture
def memory_store() -> MemoryFileStore:
    return MemoryFileStore()
