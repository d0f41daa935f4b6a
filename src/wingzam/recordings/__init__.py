"""Bird song recordings lookup package."""

from wingzam.recordings.xeno_canto import RecordingsLookupError, XenoCantoClient

__all__ = [
    "RecordingsLookupError",
    "XenoCantoClient",
]
