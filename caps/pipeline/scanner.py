"""
Directive scanning for Cap'n Proto schema sources.

Detects which optional codecs a schema asks for and which struct types it
declares. Matching is purely lexical; the schema itself is never parsed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

CAPNP_CODEC_MARKER = "$Codec.capnp;"
MSGP_CODEC_MARKER = "$Codec.msgp;"

SCHEMA_EXTENSION = ".capnp"

# "#" up to and including the line terminator, or to the end of the text
_COMMENT_PATTERN = re.compile(r"#[^\n]*(?:\n|\Z)")
_CAPNP_PATTERN = re.compile(r"^.*" + re.escape(CAPNP_CODEC_MARKER) + r".*$", re.MULTILINE)
_MSGP_PATTERN = re.compile(r"^.*" + re.escape(MSGP_CODEC_MARKER) + r".*$", re.MULTILINE)
_STRUCT_PATTERN = re.compile(r"struct ([A-Za-z]+)")


class Directive(str, Enum):
    """Optional generation stages a schema can request."""

    CAPNP = "capnp"
    MSGP = "msgp"


@dataclass(frozen=True)
class DirectiveSet:
    """Optional stages requested by a schema.

    Attributes:
        capnp: Cap'n Proto Go bindings requested (``$Codec.capnp;``)
        msgp: MessagePack code requested (``$Codec.msgp;``)
    """

    capnp: bool = False
    msgp: bool = False

    @property
    def requested(self) -> frozenset[Directive]:
        found = set()
        if self.capnp:
            found.add(Directive.CAPNP)
        if self.msgp:
            found.add(Directive.MSGP)
        return frozenset(found)


@dataclass(frozen=True)
class SchemaSource:
    """Schema file contents together with its logical name."""

    path: Path
    text: str

    @property
    def name(self) -> str:
        """Schema path without the .capnp extension.

        The schema's directory is kept, since capnp writes its output under
        the same relative path. An absolute path loses its root so that the
        name always stays below the output directory.
        """
        path = self.path
        if path.is_absolute():
            path = path.relative_to(path.anchor)
        name = path.as_posix()
        if name.endswith(SCHEMA_EXTENSION):
            return name[: -len(SCHEMA_EXTENSION)]
        return name

    @staticmethod
    def read(path: str | Path) -> SchemaSource:
        """Read a schema file.

        Bytes that are not valid UTF-8 are kept as surrogate escapes, so
        text in another encoding is scanned like any other.

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        return SchemaSource(path=path, text=path.read_text(encoding="utf-8", errors="surrogateescape"))


def strip_comments(text: str) -> str:
    """Replace every ``#`` comment, line terminator included, by a newline."""
    return _COMMENT_PATTERN.sub("\n", text)


def scan(text: str) -> DirectiveSet:
    """Find the codec directives present outside comments."""
    clean = strip_comments(text)
    return DirectiveSet(
        capnp=_CAPNP_PATTERN.search(clean) is not None,
        msgp=_MSGP_PATTERN.search(clean) is not None,
    )


def extract_type_names(text: str) -> list[str]:
    """Return the declared struct names in first-seen order.

    Duplicates are kept; the original text is scanned, comments included.
    """
    return [name for name in _STRUCT_PATTERN.findall(text) if name]
