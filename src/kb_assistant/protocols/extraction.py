"""Protocol for file text extractors."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class TextExtractor(Protocol):
    def extract(self, file_path: str | Path) -> str: ...

    @property
    def supported_extensions(self) -> list[str]: ...
