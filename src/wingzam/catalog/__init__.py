"""Bird catalog domain package.

This package contains the static bird lookup table and the name matching on top of it:
- BirdRecord, RecordingRef: Typed catalog records
- BirdCatalog: Immutable, preloaded record table
- NameMatcher: Resolves spoken phrases to catalog records
"""

from wingzam.catalog.catalog import BirdCatalog, CatalogLoadError
from wingzam.catalog.matcher import NameMatcher
from wingzam.catalog.models import BirdRecord, RecordingRef

__all__ = [
    "BirdCatalog",
    "BirdRecord",
    "CatalogLoadError",
    "NameMatcher",
    "RecordingRef",
]
