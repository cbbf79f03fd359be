"""
Renames generated Cap'n Proto types so they do not collide with the plain
Go structs generated for the same schema.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .config import DisambiguationMode

DEFAULT_SUFFIX = "Capn"

# Identifier characters that must not touch a name in token-boundary mode
_IDENTIFIER_CHARS = "A-Za-z0-9_"


def disambiguate(
    type_names: Iterable[str],
    generated_text: str,
    suffix: str = DEFAULT_SUFFIX,
    mode: DisambiguationMode = DisambiguationMode.SEQUENTIAL,
) -> str:
    """Append ``suffix`` to every occurrence of each type name.

    Names are processed in first-seen order, each once. In sequential mode each name is a
    plain substring replacement over the whole text, so with ``["User",
    "UserProfile"]`` the text ``UserProfile`` becomes ``UserCapnProfile``.
    Token-boundary mode only renames whole identifiers.

    The transform is not idempotent: running it over its own output appends
    the suffix again.

    Args:
        type_names: Declared type names, in declaration order
        generated_text: Generated source code
        suffix: Text appended to each name
        mode: How occurrences are matched

    Returns:
        The rewritten source code
    """
    content = generated_text
    for type_name in dict.fromkeys(type_names):
        if not type_name:
            continue
        if mode == DisambiguationMode.TOKEN_BOUNDARY:
            content = _replace_tokens(content, type_name, suffix)
        else:
            content = content.replace(type_name, type_name + suffix)
    return content


def _replace_tokens(content: str, type_name: str, suffix: str) -> str:
    pattern = re.compile(rf"(?<![{_IDENTIFIER_CHARS}]){re.escape(type_name)}(?![{_IDENTIFIER_CHARS}])")
    return pattern.sub(lambda _: type_name + suffix, content)
