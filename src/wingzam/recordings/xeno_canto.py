"""Client for the xeno-canto recordings API."""

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from wingzam.catalog.models import RecordingRef
from wingzam.config.models import RecordingsConfig

logger = logging.getLogger(__name__)


class RecordingsLookupError(Exception):
    """Raised when the recordings API cannot be queried."""


def format_query(query: str) -> str:
    """Format a bird name the way the xeno-canto query syntax expects.

    Examples:
        >>> format_query("  Blue  Jay ")
        'blue+jay'
    """
    return re.sub(r"\s+", "+", query.lower().strip())


class XenoCantoClient:
    """Looks up bird song recordings by name on xeno-canto."""

    def __init__(self, config: RecordingsConfig) -> None:
        self.config = config

    async def search(self, query: str) -> dict[str, Any]:
        """Search recordings and return the raw API response.

        Args:
            query: Common or scientific bird name

        Raises:
            RecordingsLookupError: If the request fails or returns invalid JSON
        """
        url = f"{self.config.api_url}?query={format_query(query)}"
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching data from xeno-canto", extra={"error": str(e)})
            raise RecordingsLookupError("Failed to fetch data from xeno-canto API.") from e

    async def find_recording(self, name: str) -> RecordingRef | None:
        """Find the recording for a uniquely identified bird.

        Returns:
            The first recording when exactly one species matches, otherwise None

        Raises:
            RecordingsLookupError: If the API cannot be queried
        """
        data = await self.search(name)

        if str(data.get("numSpecies")) != "1":
            logger.info(
                "Could not uniquely identify %r (species: %s)", name, data.get("numSpecies")
            )
            return None

        recordings = data.get("recordings") or []
        if not recordings:
            return None

        try:
            return RecordingRef.model_validate(recordings[0])
        except ValidationError as e:
            raise RecordingsLookupError(f"Unexpected recording data for {name!r}") from e
