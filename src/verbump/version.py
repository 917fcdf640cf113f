"""Parsing and incrementing of dotted version strings.

Two shapes are recognised, both validated by a fixed-arity regular expression:

* triple  ``major.minor.build``
* quartet ``major.minor.build.revision``

Text that does not have the expected shape is never an error, callers get it
back untouched.
"""

import dataclasses
import enum
import logging
import re
from typing import Optional

__all__ = [
    "Arity",
    "IncrementMode",
    "Version",
    "parse_version",
    "default_version",
    "increment_version",
    "is_bare_integer",
    "increment_integer",
    "search_and_increment",
]

logger = logging.getLogger(__name__)


class Arity(enum.IntEnum):
    TRIPLE = 3
    QUARTET = 4


class IncrementMode(enum.Enum):
    REVISION = "revision"
    BUILD = "build"


_COMPONENT_PATTERNS = {
    Arity.TRIPLE: r"(\d+)\.(\d+)\.(\d+)",
    Arity.QUARTET: r"(\d+)\.(\d+)\.(\d+)\.(\d+)",
}

_FULL_MATCHERS = {
    arity: re.compile(f"^{pattern}$", re.ASCII)
    for arity, pattern in _COMPONENT_PATTERNS.items()
}

_SEARCH_MATCHERS = {
    arity: re.compile(pattern, re.ASCII)
    for arity, pattern in _COMPONENT_PATTERNS.items()
}

_BARE_INTEGER_MATCHER = re.compile(r"^\d+$", re.ASCII)

_DEFAULTS = {
    Arity.TRIPLE: "1.0.0",
    Arity.QUARTET: "1.0.0.0",
}


@dataclasses.dataclass(frozen=True)
class Version:
    components: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.components) not in (Arity.TRIPLE, Arity.QUARTET):
            raise ValueError(f"Unsupported number of components {self.components}")
        if any(c < 0 for c in self.components):
            raise ValueError(f"Negative version component in {self.components}")

    @property
    def arity(self) -> Arity:
        return Arity(len(self.components))

    @property
    def major(self) -> int:
        return self.components[0]

    @property
    def minor(self) -> int:
        return self.components[1]

    @property
    def build(self) -> int:
        return self.components[2]

    @property
    def revision(self) -> Optional[int]:
        if self.arity == Arity.QUARTET:
            return self.components[3]
        return None

    def increment(self, mode: IncrementMode) -> "Version":
        """Return the next version.

        ``BUILD`` advances the build component and zeroes the revision (when
        there is one). ``REVISION`` advances the revision only; a triple has no
        revision, so it comes back unchanged.
        """
        if mode == IncrementMode.BUILD:
            tail = (0,) if self.arity == Arity.QUARTET else ()
            return Version((self.major, self.minor, self.build + 1) + tail)

        if self.arity == Arity.TRIPLE:
            return self
        assert self.revision is not None
        return Version((self.major, self.minor, self.build, self.revision + 1))

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)


def parse_version(text: str, arity: Arity) -> Optional[Version]:
    m = _FULL_MATCHERS[arity].match(text.strip())
    if m is None:
        return None
    return Version(tuple(int(g) for g in m.groups()))


def default_version(arity: Arity) -> str:
    return _DEFAULTS[arity]


def increment_version(text: str, arity: Arity, mode: IncrementMode) -> str:
    if not text.strip():
        text = default_version(arity)
        logger.info(f"Empty version, using default {text}")

    version = parse_version(text, arity)
    if version is None:
        logger.info(f"'{text}' is not a {arity.name.lower()} version, leaving it")
        return text
    return str(version.increment(mode))


def is_bare_integer(text: str) -> bool:
    return _BARE_INTEGER_MATCHER.match(text.strip()) is not None


def increment_integer(text: str) -> str:
    if not is_bare_integer(text):
        raise ValueError(f"'{text}' is not a non-negative integer")
    return str(int(text.strip()) + 1)


def search_and_increment(
    line: str, arity: Arity, mode: IncrementMode
) -> tuple[str, Optional[Version], Optional[Version]]:
    """Increment the first version embedded anywhere in ``line``.

    Only the matched substring is replaced, the rest of the line is kept
    verbatim. Returns ``(new_line, old_version, new_version)``; both versions
    are ``None`` when the line holds no version of the given arity.
    """
    m = _SEARCH_MATCHERS[arity].search(line)
    if m is None:
        return line, None, None

    old = Version(tuple(int(g) for g in m.groups()))
    new = old.increment(mode)
    new_line = line[: m.start()] + str(new) + line[m.end() :]
    return new_line, old, new
