"""Utilities for turning command names and candidate words into shell-safe text.

All quoting and escaping of generated bash lives here."""

import functools
import re
import shlex
from typing import Iterable, Sequence

from ._errors import InvalidArgumentError

_NONWORD_PATTERN = re.compile(r"[^A-Za-z0-9_]")
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_WHITESPACE_PATTERN = re.compile(r"\s")

# Characters that `compgen -W` would expand in a word list.
_COMPGEN_SPECIAL_PATTERN = re.compile(r"""([\\$`"'~{}*?\[\]])""")


def wordify(string: str) -> str:
    """Replace characters that can't appear in a shell identifier with underscores."""
    return _NONWORD_PATTERN.sub("_", string)


def _replacement_markers(segment: str) -> str:
    return "".join(
        f"_x{match.start()}_{ord(match.group()):x}"
        for match in _NONWORD_PATTERN.finditer(segment)
    )


def sanitize(path: Sequence[str]) -> str:
    """Build an identifier fragment from a root-to-node path of command names.

    Each segment is prefixed with its length. `wordify()` never changes the length of
    a segment, so segment boundaries stay recoverable. Every replaced character is
    recorded after the segment as `_x<position>_<code point in hex>`, so names that
    only differ in replaced characters still get distinct identifiers:

    ('a', 'bc') => '1_a_2_bc'
    ('ab', 'c') => '2_ab_1_c'
    ('my.tool', 'run') => '7_my_tool_x2_2e_3_run'
    ('v1_0',) => '4_v1_0'
    ('v1.0',) => '4_v1_0_x2_2e'
    """
    if isinstance(path, str) or len(path) == 0:
        raise InvalidArgumentError(
            f"Expected a non-empty sequence of command names, but got {path!r}"
        )
    return "_".join(
        f"{len(segment)}_{wordify(segment)}{_replacement_markers(segment)}"
        for segment in path
    )


def is_identifier(string: str) -> bool:
    return _IDENTIFIER_PATTERN.match(string) is not None


def has_whitespace(string: str) -> bool:
    return _WHITESPACE_PATTERN.search(string) is not None


def escape_compgen_word(word: str) -> str:
    """Backslash-escape a word so that `compgen -W` expands it back to itself."""
    return _COMPGEN_SPECIAL_PATTERN.sub(r"\\\1", word)


def compgen_wordlist(words: Iterable[str]) -> str:
    """Single-quoted word list for `compgen -W`.

    ['--num', 'a$b'] => '--num a\\$b' (including the quotes)
    """
    return shlex.quote(" ".join(map(escape_compgen_word, words)))


def case_pattern(tokens: Iterable[str]) -> str:
    """Pattern for a `case` arm matching any of `tokens` literally."""
    return "|".join(map(shlex.quote, tokens))


def quote_words(words: Iterable[str]) -> str:
    return " ".join(map(shlex.quote, words))


def comment_text(text: str) -> str:
    """Collapse text onto a single line, so it can't escape a `#` comment."""
    return " ".join(text.split())


@functools.lru_cache(maxsize=None)
def _camel_separator_pattern() -> "re.Pattern[str]":
    return re.compile("((?<=[a-z0-9])[A-Z]|(?!^)[A-Z](?=[a-z]))")


def hyphen_separated_from_camel_case(name: str) -> str:
    return _camel_separator_pattern().sub(r"-\1", name).lower()
