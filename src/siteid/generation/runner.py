"""Run collection, grouping and emission end to end."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from siteid.collection.collector import SiteSource, collect_sites
from siteid.collection.schemas import ResolvedSite
from siteid.config import Settings
from siteid.constants import StageOutcome
from siteid.errors import SiteIdError
from siteid.generation.emitter import EmissionUnit, render_unit, unit_name
from siteid.generation.grouping import build_bucket, partition_by_declaration
from siteid.generation.sinks import UnitSink
from siteid.identity.value_objects import DeclarationKey

logger = logging.getLogger(__name__)


@dataclass
class UnitOutcome:
    """Outcome of building one declaration's unit."""

    unit_name: str
    unit: EmissionUnit | None
    duration_ms: float
    status: StageOutcome
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == StageOutcome.COMPLETED


@dataclass
class GenerationResult:
    """Everything one run produced."""

    units: list[EmissionUnit] = field(
        default_factory=lambda: list[EmissionUnit]()
    )
    outcomes: list[UnitOutcome] = field(
        default_factory=lambda: list[UnitOutcome]()
    )
    site_count: int = 0
    duration_ms: float = 0.0

    @property
    def failures(self) -> list[UnitOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def build_unit(
    declaration: DeclarationKey,
    sites: Sequence[ResolvedSite],
    settings: Settings,
) -> UnitOutcome:
    """Build and render one declaration, capturing timing and errors.

    A :class:`SiteIdError` fails this declaration only; no partial
    unit is produced for it.
    """
    name = unit_name(declaration, settings.unit_suffix)
    start = time.monotonic()
    try:
        bucket = build_bucket(
            declaration, sites, policy=settings.duplicate_policy
        )
        unit = render_unit(bucket, declaration, suffix=settings.unit_suffix)
    except SiteIdError as exc:
        elapsed = (time.monotonic() - start) * 1000
        logger.error("event=unit_failed unit=%s error=%s", name, exc)
        return UnitOutcome(
            unit_name=name,
            unit=None,
            duration_ms=elapsed,
            status=StageOutcome.FAILED,
            error=str(exc),
        )
    elapsed = (time.monotonic() - start) * 1000
    return UnitOutcome(
        unit_name=name,
        unit=unit,
        duration_ms=elapsed,
        status=StageOutcome.COMPLETED,
    )


async def run_generation(
    source: SiteSource,
    sink: UnitSink,
    settings: Settings | None = None,
) -> GenerationResult:
    """Collect sites from ``source`` and hand one unit per declaration to ``sink``.

    Declarations are built concurrently in worker threads, at most
    ``settings.max_concurrency`` at a time; the sites of one declaration
    are always handled by a single worker. Units reach the sink sorted
    by unit name. With no annotated sites the sink is never called.
    """
    cfg = settings or Settings()
    start = time.monotonic()

    sites = await asyncio.to_thread(collect_sites, source)
    if not sites:
        logger.info("event=generation_skipped reason=no_sites")
        return GenerationResult(
            duration_ms=(time.monotonic() - start) * 1000
        )

    partitions = partition_by_declaration(sites)
    semaphore = asyncio.Semaphore(cfg.max_concurrency)

    async def _build(
        declaration: DeclarationKey, records: list[ResolvedSite]
    ) -> UnitOutcome:
        async with semaphore:
            return await asyncio.to_thread(
                build_unit, declaration, records, cfg
            )

    outcomes = await asyncio.gather(
        *(_build(key, records) for key, records in partitions.items())
    )
    outcomes = sorted(outcomes, key=lambda o: o.unit_name)

    units = [o.unit for o in outcomes if o.unit is not None]
    for unit in units:
        sink.accept(unit.unit_name, unit.text)

    result = GenerationResult(
        units=units,
        outcomes=outcomes,
        site_count=len(sites),
        duration_ms=(time.monotonic() - start) * 1000,
    )
    logger.info(
        "event=generation_done sites=%d units=%d failed=%d duration_ms=%.1f",
        result.site_count,
        len(result.units),
        len(result.failures),
        result.duration_ms,
    )
    return result


def generate(
    source: SiteSource,
    sink: UnitSink,
    settings: Settings | None = None,
) -> GenerationResult:
    """Synchronous wrapper around :func:`run_generation`."""
    return asyncio.run(run_generation(source, sink, settings))
