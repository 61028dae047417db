"""Identity keys used to match a mod across two snapshots."""

import re
from collections.abc import Iterable
from functools import lru_cache

from modpack_manager.constants import PRERELEASE_MARKERS, PRERELEASE_TOKENS
from modpack_manager.schemas.snapshot import ModRecord

TRAILING_SEPARATOR_RE = re.compile(r"[-_.\s]+$")


@lru_cache(maxsize=16)
def _marker_re(markers: tuple[str, ...], tokens: tuple[str, ...]) -> re.Pattern[str]:
    parts = [re.escape(m.lower()) for m in markers]
    parts += [rf"(?<=[-_.\s]){re.escape(t.lower())}(?![a-z])" for t in tokens]
    return re.compile("|".join(parts) or r"(?!)")


def normalize_mod_name(
    name: str,
    markers: Iterable[str] = PRERELEASE_MARKERS,
    tokens: Iterable[str] = PRERELEASE_TOKENS,
) -> str:
    """Lowercase *name*, dropping everything from a pre-release marker onwards.

    A marker at the very start belongs to the name itself and is skipped.

    >>> normalize_mod_name("Foo-beta3")
    'foo'
    >>> normalize_mod_name("BetaWorld-beta3")
    'betaworld'
    >>> normalize_mod_name("Foo-rc1")
    'foo'
    """
    lower = name.lower()
    pattern = _marker_re(tuple(markers), tuple(tokens))
    cut = next((m.start() for m in pattern.finditer(lower) if m.start() > 0), -1)
    if cut == -1:
        return lower
    return TRAILING_SEPARATOR_RE.sub("", lower[:cut]) or lower


def key_of(record: ModRecord) -> str:
    """Return the comparison key for *record*, falling back to its filename."""
    name = record.identity.name if record.identity else ""
    if name:
        return normalize_mod_name(name)
    return record.file_name
