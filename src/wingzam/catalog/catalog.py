"""Immutable in-memory bird catalog loaded from the precomputed data file."""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wingzam.catalog.models import BirdRecord

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Raised when the catalog source is missing or malformed."""


class BirdCatalog:
    """Ordered, read-only table of bird records.

    The catalog holds a few hundred records at most, so lookups other than by id are
    plain linear scans in file order.
    """

    def __init__(self, records: Iterable[BirdRecord]) -> None:
        self._records: tuple[BirdRecord, ...] = tuple(records)
        self._by_id: dict[int | str, BirdRecord] = {}
        for record in self._records:
            # Keep the first record for duplicate ids, matching scan order
            self._by_id.setdefault(record.id, record)

    @classmethod
    def load(cls, source: Path | str) -> "BirdCatalog":
        """Load the catalog from a JSON file.

        Args:
            source: Path to a JSON file containing a list of bird objects

        Returns:
            BirdCatalog: The loaded catalog

        Raises:
            CatalogLoadError: If the file is missing, is not valid JSON, or any
                record fails validation
        """
        path = Path(source)
        try:
            raw_text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CatalogLoadError(f"Catalog file not found: {path}") from e
        except OSError as e:
            raise CatalogLoadError(f"Could not read catalog file {path}: {e}") from e

        try:
            raw_data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"Catalog file {path} is not valid JSON: {e}") from e

        catalog = cls.from_data(raw_data)
        logger.info("Loaded bird catalog from %s with %d records", path, len(catalog))
        return catalog

    @classmethod
    def from_data(cls, raw_data: Any) -> "BirdCatalog":
        """Build a catalog from already-parsed JSON data.

        Records without an ``id`` are identified by their position in the list.

        Raises:
            CatalogLoadError: If the data is not a list of valid bird objects
        """
        if not isinstance(raw_data, list):
            raise CatalogLoadError("Catalog data must be a list of bird records")

        records = []
        for index, entry in enumerate(raw_data):
            if not isinstance(entry, dict):
                raise CatalogLoadError(f"Catalog record {index} is not an object")
            if "id" not in entry:
                entry = {**entry, "id": index}
            try:
                records.append(BirdRecord.model_validate(entry))
            except ValidationError as e:
                name = entry.get("common_name", "<missing common_name>")
                raise CatalogLoadError(f"Invalid catalog record {index} ({name}): {e}") from e

        return cls(records)

    def get(self, bird_id: int | str) -> BirdRecord | None:
        """Get a record by its exact id.

        Numeric ids are also found when given as strings (as in URL paths).
        """
        record = self._by_id.get(bird_id)
        if record is None and isinstance(bird_id, str) and bird_id.isdigit():
            record = self._by_id.get(int(bird_id))
        return record

    @property
    def records(self) -> tuple[BirdRecord, ...]:
        """All records in catalog order."""
        return self._records

    def __iter__(self) -> Iterator[BirdRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
