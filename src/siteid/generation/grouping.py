"""Bucket resolved sites by owning declaration, member and parameter."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from siteid.collection.schemas import ResolvedSite
from siteid.constants import DuplicatePolicy, IdFormat, constant_name
from siteid.errors import DuplicateSiteError, SealedBucketError
from siteid.identity.formats import identify
from siteid.identity.value_objects import CoordinateTuple, DeclarationKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketEntry:
    """A rendered identifier and the site it was derived from."""

    identifier: str
    coordinates: CoordinateTuple
    format: IdFormat


class Bucket:
    """Per-declaration accumulator: member → parameter → entry.

    Insertion is serialized by a lock so sites of one declaration can be
    added from several threads. Once sealed the bucket is read-only.
    """

    def __init__(self, declaration: DeclarationKey) -> None:
        self.declaration = declaration
        self._members: dict[str, dict[str, BucketEntry]] = {}
        self._lock = threading.Lock()
        self._sealed = False

    def insert(
        self,
        site: ResolvedSite,
        identifier: str,
        *,
        policy: DuplicatePolicy = DuplicatePolicy.ERROR,
    ) -> None:
        """Store ``identifier`` for the site's member and parameter.

        Re-inserting the same coordinates is a no-op overwrite. A
        different site claiming the same constant raises
        :class:`DuplicateSiteError` unless ``policy`` is ``LAST_WINS``.
        """
        entry = BucketEntry(
            identifier=identifier,
            coordinates=site.coordinates,
            format=site.format,
        )
        with self._lock:
            if self._sealed:
                raise SealedBucketError(
                    f"{self.declaration.qualified_name} is sealed"
                )
            params = self._members.setdefault(site.member, {})
            existing = params.get(site.parameter)
            if existing is not None and existing.coordinates != site.coordinates:
                if policy == DuplicatePolicy.ERROR:
                    raise DuplicateSiteError(
                        self.declaration.qualified_name,
                        site.member,
                        site.parameter,
                        existing.coordinates,
                        site.coordinates,
                    )
                logger.warning(
                    "event=duplicate_site_overwritten declaration=%s "
                    "constant=%s kept=%s dropped=%s",
                    self.declaration.qualified_name,
                    site.constant_name,
                    site.coordinates.location,
                    existing.coordinates.location,
                )
            params[site.parameter] = entry

    def seal(self) -> None:
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def members(self) -> Mapping[str, Mapping[str, BucketEntry]]:
        return MappingProxyType(
            {m: MappingProxyType(p) for m, p in self._members.items()}
        )

    def constants(self) -> Iterator[tuple[str, str, BucketEntry]]:
        """Yield ``(member, parameter, entry)`` in insertion order."""
        for member, params in self._members.items():
            for parameter, entry in params.items():
                yield member, parameter, entry

    def constant_names(self) -> list[str]:
        return [constant_name(m, p) for m, p, _ in self.constants()]

    def __len__(self) -> int:
        return sum(len(p) for p in self._members.values())


def identify_site(site: ResolvedSite) -> str:
    """Rendered identifier for one site."""
    return identify(site.coordinates, site.format)


def partition_by_declaration(
    sites: Iterable[ResolvedSite],
) -> dict[DeclarationKey, list[ResolvedSite]]:
    """Split sites per owning declaration, keeping feed order."""
    partitions: dict[DeclarationKey, list[ResolvedSite]] = {}
    for site in sites:
        partitions.setdefault(site.declaration, []).append(site)
    return partitions


def build_bucket(
    declaration: DeclarationKey,
    sites: Iterable[ResolvedSite],
    *,
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> Bucket:
    """Fingerprint, render and insert every site of one declaration."""
    bucket = Bucket(declaration)
    for site in sites:
        if site.declaration != declaration:
            raise ValueError(
                f"site of {site.declaration.qualified_name} does not "
                f"belong to {declaration.qualified_name}"
            )
        bucket.insert(site, identify_site(site), policy=policy)
    bucket.seal()
    return bucket


def group(
    sites: Iterable[ResolvedSite],
    *,
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> dict[DeclarationKey, Bucket]:
    """Bucket every site by owning declaration.

    Buckets are created on first insertion and returned sealed.
    Identical identifiers across declarations are not checked.
    """
    buckets: dict[DeclarationKey, Bucket] = {}
    for site in sites:
        bucket = buckets.get(site.declaration)
        if bucket is None:
            bucket = Bucket(site.declaration)
            buckets[site.declaration] = bucket
        bucket.insert(site, identify_site(site), policy=policy)
    for bucket in buckets.values():
        bucket.seal()
    return buckets
