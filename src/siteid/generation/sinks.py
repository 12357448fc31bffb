"""Receivers for generated units."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from siteid.constants import DEFAULT_OUTPUT_EXTENSION

logger = logging.getLogger(__name__)


@runtime_checkable
class UnitSink(Protocol):
    """Accepts one generated unit at a time."""

    def accept(self, unit_name: str, text: str) -> None: ...


class DirectorySink:
    """Writes each unit to ``<output_dir>/<unit_name><extension>``."""

    def __init__(
        self,
        output_dir: Path,
        extension: str = DEFAULT_OUTPUT_EXTENSION,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.extension = extension
        self.written: list[Path] = []

    def accept(self, unit_name: str, text: str) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{unit_name}{self.extension}"
        path.write_text(text, encoding="utf-8")
        self.written.append(path)
        logger.debug("event=unit_written path=%s", path)


class MemorySink:
    """Keeps accepted units in memory, in acceptance order."""

    def __init__(self) -> None:
        self.units: dict[str, str] = {}
        self.calls = 0

    def accept(self, unit_name: str, text: str) -> None:
        self.calls += 1
        self.units[unit_name] = text
