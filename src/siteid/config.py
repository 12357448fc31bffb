"""Environment-based configuration."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from siteid.constants import (
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_UNIT_SUFFIX,
    DuplicatePolicy,
    IdFormat,
)

logger = logging.getLogger(__name__)


def _split_csv(v: Any) -> Any:
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class Settings(BaseSettings):
    """Reads from .env file and ``SITEID_*`` environment variables."""

    # Attribute recognition
    attribute_names: Annotated[list[str], NoDecode] = [
        "UniqueId",
        "UniqueIdAttribute",
    ]
    attribute_namespace: str = "Praefixum"
    default_format: IdFormat = IdFormat.HEX16

    # Grouping
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR
    max_concurrency: int = 4

    # Emission
    unit_suffix: str = DEFAULT_UNIT_SUFFIX
    output_extension: str = DEFAULT_OUTPUT_EXTENSION

    # Discovery
    source_extensions: Annotated[list[str], NoDecode] = [".cs"]
    skip_directories: Annotated[list[str], NoDecode] = [
        "bin",
        "obj",
        "packages",
        "node_modules",
        "TestResults",
        ".vs",
        ".git",
        ".svn",
        ".hg",
    ]

    # Logging
    log_level: str = "INFO"

    @field_validator(
        "attribute_names",
        "source_extensions",
        "skip_directories",
        mode="before",
    )
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        return _split_csv(v)

    @field_validator("attribute_names")
    @classmethod
    def _validate_attribute_names(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "attribute_names must contain at least one name"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for name in v:
            if name in seen:
                dupes.append(name)
            seen.add(name)
        if dupes:
            logger.warning(
                "Duplicate names in SITEID_ATTRIBUTE_NAMES: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("source_extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]

    @field_validator("max_concurrency")
    @classmethod
    def _validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_concurrency must be at least 1")
        return v

    @property
    def attribute_name_set(self) -> frozenset[str]:
        """Attribute names with and without the ``Attribute`` suffix."""
        names: set[str] = set()
        for name in self.attribute_names:
            names.add(name)
            if name.endswith("Attribute"):
                names.add(name[: -len("Attribute")])
            else:
                names.add(f"{name}Attribute")
        return frozenset(names)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SITEID_",
        "extra": "ignore",
    }
