"""Filter an analysis feed down to annotated parameter sites."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from siteid.collection.schemas import AnnotationOccurrence, ResolvedSite
from siteid.constants import OccurrenceKind

logger = logging.getLogger(__name__)


@runtime_checkable
class SiteSource(Protocol):
    """Anything that can enumerate annotation occurrences."""

    def occurrences(self) -> Iterable[AnnotationOccurrence]: ...


class StaticSiteSource:
    """In-memory feed over pre-built occurrences."""

    def __init__(
        self, occurrences: Iterable[AnnotationOccurrence] = ()
    ) -> None:
        self._occurrences = list(occurrences)

    def add(self, occurrence: AnnotationOccurrence) -> None:
        self._occurrences.append(occurrence)

    def occurrences(self) -> Iterator[AnnotationOccurrence]:
        return iter(self._occurrences)

    def __len__(self) -> int:
        return len(self._occurrences)


def collect_sites(source: SiteSource) -> list[ResolvedSite]:
    """Resolve every annotated parameter occurrence in ``source``.

    Occurrences on anything other than a parameter, and parameters
    without the identifier attribute, are dropped. Feed order is kept.
    """
    sites: list[ResolvedSite] = []
    skipped = 0
    for occ in source.occurrences():
        if occ.kind != OccurrenceKind.PARAMETER or not occ.annotated:
            skipped += 1
            continue
        sites.append(resolve(occ))

    logger.debug(
        "event=sites_collected sites=%d skipped=%d", len(sites), skipped
    )
    return sites


def resolve(occ: AnnotationOccurrence) -> ResolvedSite:
    return ResolvedSite(
        declaration=occ.declaration,
        member=occ.member_name,
        parameter=occ.parameter_name,
        coordinates=occ.coordinates,
        format=occ.format,
    )
