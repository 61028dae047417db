"""Classify mod filenames into a :class:`ModIdentity`.

The decision tree is an ordered table of rules.  Each rule has a guard
(``matches``) and a transform (``apply``); the first rule whose guard passes
decides how the version tokens are read.  Shared post-processing then
applies name overrides, normalises the platform version and computes its
validity.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from modpack_manager.constants import (
    ARCHIVE_EXTENSIONS,
    FILLER_WORDS,
    LOADER_ALIASES,
    NAME_OVERRIDES,
)
from modpack_manager.matching.tokens import (
    WILDCARD_SUFFIX_RE,
    Tokenizer,
    TokenStream,
    is_version_shaped,
    normalize_platform_token,
)
from modpack_manager.schemas.snapshot import ModIdentity

logger = logging.getLogger(__name__)

_FALLBACK_PLATFORM_RE = re.compile(r"^1\.(\d+)(?:\.\d+)?$")
_LOOKS_LIKE_PLATFORM_RE = re.compile(r"^1\.\d+")

FALLBACK_RULE = "fallback"


@dataclass(frozen=True)
class ClassifierContext:
    platform_version: str = "1.21.1"
    loader: str = "unknown"
    known_platform_versions: frozenset[str] = frozenset()
    loader_aliases: Mapping[str, str] = field(default_factory=lambda: dict(LOADER_ALIASES))
    filler_words: frozenset[str] = FILLER_WORDS
    extensions: tuple[str, ...] = ARCHIVE_EXTENSIONS
    name_overrides: Mapping[str, str] = field(default_factory=lambda: dict(NAME_OVERRIDES))
    split_on_at: bool = False
    # Without a version catalog, only 1.N[.M] with N at or above this count as platform
    fallback_min_minor: int = 12

    @classmethod
    def create(
        cls,
        platform_version: str = "1.21.1",
        loader: str = "unknown",
        known_platform_versions: Iterable[str] = (),
        **kwargs,
    ) -> ClassifierContext:
        return cls(
            platform_version=platform_version,
            loader=loader,
            known_platform_versions=frozenset(v.strip() for v in known_platform_versions if v),
            **kwargs,
        )

    def tokenizer(self) -> Tokenizer:
        return Tokenizer(
            default_loader=self.loader,
            loader_aliases=self.loader_aliases,
            filler_words=self.filler_words,
            extensions=self.extensions,
            split_on_at=self.split_on_at,
        )

    def _matches_catalog(self, version: str) -> bool:
        return any(
            known == version or known.startswith(version + ".")
            for known in self.known_platform_versions
        )

    def is_platform_version(self, token: str) -> bool:
        """Return True if *token* names a platform version rather than a mod version."""
        version = normalize_platform_token(token)
        if self.known_platform_versions:
            return self._matches_catalog(version)
        m = _FALLBACK_PLATFORM_RE.match(version)
        return bool(m) and int(m.group(1)) >= self.fallback_min_minor

    def is_valid_platform_version(self, version: str) -> bool:
        version = normalize_platform_token(version)
        if self.known_platform_versions:
            return self._matches_catalog(version)
        return bool(_LOOKS_LIKE_PLATFORM_RE.match(version))


@dataclass
class Draft:
    """Mutable working state threaded through the rule table."""

    stream: TokenStream
    tokens: list[str]
    name: str = ""
    version: str | None = None
    platform_version: str | None = None
    platform_from_filename: bool = False
    rule: str = ""

    @classmethod
    def from_stream(cls, stream: TokenStream) -> Draft:
        return cls(stream=stream, tokens=list(stream.tokens))

    def version_indices(self) -> list[int]:
        return [i for i, t in enumerate(self.tokens) if is_version_shaped(t)]

    def name_before(self, index: int) -> str:
        return "-".join(self.tokens[:index])


# ---------------------------------------------------------------------------
# Protocol + Registry
# ---------------------------------------------------------------------------


class ClassificationRule(Protocol):
    name: str

    def matches(self, draft: Draft, ctx: ClassifierContext) -> bool: ...

    def apply(self, draft: Draft, ctx: ClassifierContext) -> None: ...


_RULES: list[type[ClassificationRule]] = []


def register_rule(cls: type[ClassificationRule]) -> type[ClassificationRule]:
    """Class decorator that appends a rule to the ordered rule table."""
    if cls not in _RULES:
        _RULES.append(cls)
    return cls


def get_rules() -> list[ClassificationRule]:
    return [cls() for cls in _RULES]  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Built-in rules, in evaluation order
# ---------------------------------------------------------------------------


def _compound_index(tokens: list[str]) -> int | None:
    for i, token in enumerate(tokens):
        left, sep, right = token.partition("+")
        if sep and left and right:
            return i
    return None


@register_rule
class CompoundTokenRule:
    """``modversion+platformversion`` packed into a single token."""

    name = "compound_token"

    def matches(self, draft: Draft, ctx: ClassifierContext) -> bool:
        return _compound_index(draft.tokens) is not None

    def apply(self, draft: Draft, ctx: ClassifierContext) -> None:
        index = _compound_index(draft.tokens)
        if index is None:
            raise ValueError(f"No compound token in {draft.stream.cleaned!r}")
        token = draft.tokens[index]
        left, _, right = token.partition("+")

        if index > 0 and is_version_shaped(draft.tokens[index - 1]):
            previous = draft.tokens[index - 1]
            if ctx.is_platform_version(previous):
                draft.platform_version = previous
                draft.version = token
            else:
                draft.version = f"{previous}-{left}"
                draft.platform_version = right
            del draft.tokens[index - 1]
            index -= 1
        else:
            draft.version = left
            draft.platform_version = right

        draft.platform_from_filename = True
        draft.name = draft.name_before(index)


@register_rule
class NoVersionRule:
    name = "no_version"

    def matches(self, draft: Draft, ctx: ClassifierContext) -> bool:
        return not draft.version_indices()

    def apply(self, draft: Draft, ctx: ClassifierContext) -> None:
        draft.name = draft.stream.cleaned


@register_rule
class SingleVersionRule:
    name = "single_version"

    def matches(self, draft: Draft, ctx: ClassifierContext) -> bool:
        return len(draft.version_indices()) == 1

    def apply(self, draft: Draft, ctx: ClassifierContext) -> None:
        index = draft.version_indices()[0]
        token = draft.tokens[index]
        draft.name = draft.name_before(index)
        if ctx.is_platform_version(token):
            draft.platform_version = normalize_platform_token(token)
            draft.platform_from_filename = True
            if not draft.name:
                draft.version = draft.platform_version
        else:
            draft.version = token


@register_rule
class MultiVersionRule:
    """Two or more version tokens: only the first two are considered."""

    name = "multi_version"

    def matches(self, draft: Draft, ctx: ClassifierContext) -> bool:
        return len(draft.version_indices()) >= 2

    def apply(self, draft: Draft, ctx: ClassifierContext) -> None:
        first, second = draft.version_indices()[:2]
        earlier, later = draft.tokens[first], draft.tokens[second]
        draft.name = draft.name_before(first)

        if ctx.is_platform_version(earlier) and not ctx.is_platform_version(later):
            platform, version = earlier, later
        else:
            # Covers "only the later one" as well as the neither/both tie-break
            platform, version = later, earlier

        draft.platform_version = normalize_platform_token(platform)
        draft.version = version
        draft.platform_from_filename = True


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


def apply_name_overrides(name: str, overrides: Mapping[str, str]) -> str:
    lower = name.lower()
    for prefix, canonical in overrides.items():
        if lower.startswith(prefix):
            return canonical
    return name


class FilenameClassifier:
    def __init__(self, context: ClassifierContext | None = None) -> None:
        self.context = context or ClassifierContext()
        self.tokenizer = self.context.tokenizer()
        self.rules = get_rules()

    def _fallback(self, file_name: str) -> ModIdentity:
        ctx = self.context
        return ModIdentity(
            name=self.tokenizer.clean(file_name) or file_name,
            version=None,
            platform_version=ctx.platform_version,
            loader=ctx.loader,
            valid_platform_version=ctx.is_valid_platform_version(ctx.platform_version),
        )

    def draft(self, file_name: str) -> Draft:
        """Run the rule table and return the working state, before post-processing."""
        draft = Draft.from_stream(self.tokenizer.normalize(file_name))
        for rule in self.rules:
            if rule.matches(draft, self.context):
                rule.apply(draft, self.context)
                draft.rule = rule.name
                break
        return draft

    def classify(self, file_name: str) -> ModIdentity:
        return self.classify_with_rule(file_name)[0]

    def classify_with_rule(self, file_name: str) -> tuple[ModIdentity, str]:
        """Classify *file_name* and name the rule that decided it (``fallback`` on error)."""
        try:
            return self._classify(file_name)
        except Exception:
            logger.warning(
                "Failed to classify %r, using filename as name", file_name, exc_info=True
            )
            return self._fallback(file_name), FALLBACK_RULE

    def _classify(self, file_name: str) -> tuple[ModIdentity, str]:
        ctx = self.context
        draft = self.draft(file_name)

        name = apply_name_overrides(draft.name, ctx.name_overrides)
        name = name or draft.stream.cleaned or file_name

        platform_version = draft.platform_version or ctx.platform_version
        platform_version = WILDCARD_SUFFIX_RE.sub("", platform_version)

        version = draft.version
        if not version and draft.platform_from_filename:
            version = platform_version

        identity = ModIdentity(
            name=name,
            version=version or None,
            platform_version=platform_version,
            loader=draft.stream.loader,
            valid_platform_version=ctx.is_valid_platform_version(platform_version),
        )
        return identity, draft.rule


def classify(file_name: str, context: ClassifierContext | None = None) -> ModIdentity:
    """Classify a single filename; see :class:`FilenameClassifier`."""
    return FilenameClassifier(context).classify(file_name)
