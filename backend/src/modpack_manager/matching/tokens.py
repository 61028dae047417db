"""Split mod archive filenames into tokens for classification.

Filenames such as ``Xaeros_Minimap_24.0.3_Forge_1.20.jar`` or
``sodium-fabric-0.5.8+mc1.20.4.jar`` carry no schema; this module only
removes the noise (extension, loader, filler words) and leaves the ordering
decisions to :mod:`modpack_manager.matching.classifier`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from modpack_manager.constants import ARCHIVE_EXTENSIONS, FILLER_WORDS, LOADER_ALIASES

VERSION_RE = re.compile(r"^(?:v|mc)?(?:\d+\.)+.*$", re.IGNORECASE)
PLATFORM_PREFIX_RE = re.compile(r"^(?:mc|v)", re.IGNORECASE)
WILDCARD_SUFFIX_RE = re.compile(r"\.x$", re.IGNORECASE)
PAREN_RE = re.compile(r"\s*\(.*?\)")


@dataclass(frozen=True, slots=True)
class TokenStream:
    tokens: tuple[str, ...]
    loader: str
    cleaned: str


def is_version_shaped(token: str) -> bool:
    """Return True for tokens like ``1.2.3``, ``v2.0`` or ``1.20.1-beta3``.

    >>> is_version_shaped("v2.0")
    True
    >>> is_version_shaped("examplemod")
    False
    """
    return bool(VERSION_RE.match(token))


def normalize_platform_token(token: str) -> str:
    """Strip ``mc``/``v`` prefixes and a trailing ``.x`` wildcard.

    >>> normalize_platform_token("mc1.20.x")
    '1.20'
    """
    return WILDCARD_SUFFIX_RE.sub("", PLATFORM_PREFIX_RE.sub("", token))


def strip_extension(file_name: str, extensions: Iterable[str] = ARCHIVE_EXTENSIONS) -> str:
    lower = file_name.lower()
    for ext in extensions:
        if lower.endswith(ext.lower()):
            return file_name[: -len(ext)]
    return file_name


class Tokenizer:
    """Configurable filename tokenizer.

    ``split_on_at`` selects the alternate policy where ``@`` separates tokens
    as well as ``-``.
    """

    def __init__(
        self,
        default_loader: str = "unknown",
        loader_aliases: Mapping[str, str] | None = None,
        filler_words: Iterable[str] = FILLER_WORDS,
        extensions: Iterable[str] = ARCHIVE_EXTENSIONS,
        split_on_at: bool = False,
    ) -> None:
        self.default_loader = default_loader
        self.loader_aliases = {
            k.lower(): v for k, v in (loader_aliases or LOADER_ALIASES).items()
        }
        self.filler_words = frozenset(w.lower() for w in filler_words)
        self.extensions = tuple(extensions)
        self._split_re = re.compile(r"[-@]" if split_on_at else r"-")

    def clean(self, file_name: str) -> str:
        return strip_extension(file_name.strip(), self.extensions).replace("_", "-")

    def normalize(self, file_name: str) -> TokenStream:
        cleaned = self.clean(file_name)
        loader: str | None = None
        tokens: list[str] = []
        for raw in self._split_re.split(cleaned):
            token = PAREN_RE.sub("", raw).strip()
            if not token:
                continue
            lower = token.lower()
            if lower in self.filler_words:
                continue
            canonical = self.loader_aliases.get(lower)
            if canonical is not None:
                if loader is None:
                    loader = canonical
                continue
            tokens.append(token)
        return TokenStream(
            tokens=tuple(tokens),
            loader=loader or self.default_loader,
            cleaned=cleaned,
        )
