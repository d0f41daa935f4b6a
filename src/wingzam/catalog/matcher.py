"""Resolve a spoken phrase to a catalog record."""

import logging

from wingzam.catalog.aliases import alternate_names, normalize_name
from wingzam.catalog.catalog import BirdCatalog
from wingzam.catalog.models import BirdRecord

logger = logging.getLogger(__name__)


class NameMatcher:
    """Matches free-form queries against a BirdCatalog.

    Matching is by equality only, never substring or fuzzy containment:

    1. the trimmed, lowercased query against each common name;
    2. the query's alternate spellings against each record's stored aliases.

    In both passes the first record in catalog order wins. Two records sharing an
    alias therefore resolve to whichever appears first in the data file.
    """

    def __init__(self, catalog: BirdCatalog) -> None:
        self.catalog = catalog

    def match(self, query: str) -> BirdRecord | None:
        """Find the bird named by a query.

        Args:
            query: Raw transcript or typed name

        Returns:
            The matching record, or None when nothing matches
        """
        normalized = normalize_name(query)
        if not normalized:
            return None

        for record in self.catalog:
            if record.common_name.lower() == normalized:
                logger.debug("Exact match for %r: %s", normalized, record.common_name)
                return record

        variants = alternate_names(normalized)
        for record in self.catalog:
            if any(record.has_alias(variant) for variant in variants):
                logger.debug("Alias match for %r: %s", normalized, record.common_name)
                return record

        logger.debug("No bird matches %r", normalized)
        return None
