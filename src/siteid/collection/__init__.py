"""Site collection: analysis feeds and the collector that filters them."""

from siteid.collection.collector import (
    SiteSource,
    StaticSiteSource,
    collect_sites,
    resolve,
)
from siteid.collection.schemas import AnnotationOccurrence, ResolvedSite

__all__ = [
    "AnnotationOccurrence",
    "ResolvedSite",
    "SiteSource",
    "StaticSiteSource",
    "collect_sites",
    "resolve",
]
