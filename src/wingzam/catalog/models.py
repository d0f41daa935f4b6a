"""Typed records for the bird catalog.

Catalog entries arrive as loosely shaped JSON produced by the enrichment step. They are
validated into these frozen models once at load time so that later code never has to
guess at missing keys.
"""

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from wingzam.catalog.aliases import alternate_names, normalize_name

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def absolute_url(url: str | None) -> str | None:
    """Turn protocol-relative URLs (``//host/path``) into https URLs."""
    if url and url.startswith("//"):
        return f"https:{url}"
    return url


class RecordingRef(BaseModel):
    """Reference to a bird song recording and where it was made."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    latitude: float | None = Field(
        default=None, validation_alias=AliasChoices("latitude", "lat")
    )
    longitude: float | None = Field(
        default=None, validation_alias=AliasChoices("longitude", "lng")
    )
    file: str = Field(..., description="Audio file URL")
    sonogram_url: str | None = Field(default=None, description="Medium sonogram image URL")

    @model_validator(mode="before")
    @classmethod
    def _flatten_sonogram(cls, data: Any) -> Any:
        """Pull the medium sonogram out of the nested ``sono`` object."""
        if isinstance(data, dict) and "sono" in data and "sonogram_url" not in data:
            data = dict(data)
            sono = data.pop("sono")
            if isinstance(sono, dict):
                data["sonogram_url"] = sono.get("med")
        return data

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _blank_coordinate(cls, v: Any) -> Any:
        # Recording sites without coordinates are exported as empty strings
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("file", "sonogram_url")
    @classmethod
    def _absolute_url(cls, v: str | None) -> str | None:
        return absolute_url(v)


class BirdRecord(BaseModel):
    """A single bird in the catalog.

    ``aliases`` holds the normalized alternate spellings computed by the enrichment
    step (``common_names`` in the data file). It always contains the lowercased
    common name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int | str
    common_name: str
    scientific_name: str = ""
    expansion: str = ""
    color: str = ""
    power_text: str | None = None
    wingspan: float | None = Field(default=None, ge=0, description="Wingspan in centimetres")
    note: str | None = None
    recording: RecordingRef | None = None
    frontend_sound_url: str | None = None
    aliases: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("aliases", "common_names")
    )

    @model_validator(mode="before")
    @classmethod
    def _complete_aliases(cls, data: Any) -> Any:
        """Normalize stored aliases and make sure the lowercased common name is among them."""
        if not isinstance(data, dict):
            return data
        common_name = data.get("common_name")
        if not isinstance(common_name, str):
            return data

        stored = data.get("aliases", data.get("common_names")) or []
        if isinstance(stored, str):
            stored = [stored]
        names = [normalize_name(common_name)]
        names.extend(normalize_name(alias) for alias in stored if isinstance(alias, str))
        if not stored:
            names.extend(alternate_names(common_name))

        data = {k: v for k, v in data.items() if k != "common_names"}
        data["aliases"] = tuple(name for name in dict.fromkeys(names) if name)
        return data

    @field_validator("common_name")
    @classmethod
    def _common_name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("common_name must not be empty")
        return v.strip()

    @field_validator("wingspan", mode="before")
    @classmethod
    def _parse_wingspan(cls, v: Any) -> Any:
        """Accept numbers or strings such as ``"25 cm"``; blank strings mean unknown."""
        if isinstance(v, str):
            match = _NUMBER.search(v)
            return float(match.group()) if match else None
        return v

    @field_validator("frontend_sound_url")
    @classmethod
    def _absolute_sound_url(cls, v: str | None) -> str | None:
        return absolute_url(v)

    def has_alias(self, name: str) -> bool:
        """Check whether an already-normalized name is one of this bird's aliases."""
        return name in self.aliases

    def __str__(self) -> str:
        """Return string representation for debugging."""
        return f"{self.common_name} ({self.scientific_name})"
