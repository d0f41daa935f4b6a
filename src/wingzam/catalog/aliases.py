"""Name normalization shared by catalog preparation and live matching.

The enrichment step stores these variants as ``common_names`` in the catalog file;
the matcher derives the same variants from the spoken query, so both sides must
go through the functions below.
"""

import re

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(text: str) -> str:
    """Trim and lowercase a name or query."""
    return text.strip().lower()


def alternate_names(name: str) -> list[str]:
    """Derive the alternate spellings of a bird name.

    Produces, in order and without duplicates: the lowercased name, the name with
    punctuation removed, whitespace runs replaced by hyphens, and hyphens replaced
    by spaces.

    Examples:
        >>> alternate_names("Blue-Jay")
        ['blue-jay', 'bluejay', 'blue jay']
    """
    lower_name = normalize_name(name)
    variants = [
        lower_name,
        _PUNCTUATION.sub("", lower_name),
        _WHITESPACE.sub("-", lower_name),
        lower_name.replace("-", " "),
    ]
    return list(dict.fromkeys(variants))
