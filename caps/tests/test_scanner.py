"""
Tests for codec directive scanning and struct name extraction.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from caps.pipeline.scanner import (
    Directive,
    DirectiveSet,
    SchemaSource,
    extract_type_names,
    scan,
    strip_comments,
)

SCHEMA_HEADER = """@0xdbb9ad1f14bf0b36;
using Go = import "/go.capnp";
using Codec = import "/caps.capnp";
$Go.package("model");
"""

STRUCTS = """
struct User {
  name @0 :Text;
  age @1 :UInt8;
}

struct Group {
  members @0 :List(User);
}
"""


class TestStripComments:
    """Tests for comment removal."""

    def test_comment_line_becomes_newline(self):
        assert strip_comments("a\n# comment\nb") == "a\n\nb"

    def test_trailing_comment_on_code_line(self):
        assert strip_comments("struct A {} # note\nstruct B {}") == "struct A {} \nstruct B {}"

    def test_comment_on_last_unterminated_line(self):
        assert strip_comments("struct A {}\n# $Codec.capnp;") == "struct A {}\n\n"

    def test_text_without_comments_is_unchanged(self):
        assert strip_comments(STRUCTS) == STRUCTS


class TestScan:
    """Tests for codec directive detection."""

    def test_no_directives(self):
        directives = scan(SCHEMA_HEADER + STRUCTS)
        assert directives == DirectiveSet(capnp=False, msgp=False)
        assert directives.requested == frozenset()

    def test_empty_text(self):
        assert scan("") == DirectiveSet()

    @pytest.mark.parametrize(
        "markers, expected",
        [
            ([], DirectiveSet(capnp=False, msgp=False)),
            (["$Codec.capnp;"], DirectiveSet(capnp=True, msgp=False)),
            (["$Codec.msgp;"], DirectiveSet(capnp=False, msgp=True)),
            (["$Codec.capnp;", "$Codec.msgp;"], DirectiveSet(capnp=True, msgp=True)),
        ],
    )
    def test_directives_are_independent(self, markers, expected):
        text = SCHEMA_HEADER + "".join(f"{marker}\n" for marker in markers) + STRUCTS
        assert scan(text) == expected

    def test_directive_in_comment_is_ignored(self):
        text = SCHEMA_HEADER + "# $Codec.capnp;\n#$Codec.msgp;\n" + STRUCTS
        assert scan(text) == DirectiveSet(capnp=False, msgp=False)

    def test_directive_after_code_in_comment_is_ignored(self):
        text = SCHEMA_HEADER + "$Go.import(\"model\"); # $Codec.msgp;\n" + STRUCTS
        assert scan(text).msgp is False

    def test_directive_in_final_comment_is_ignored(self):
        assert scan(SCHEMA_HEADER + STRUCTS + "# $Codec.capnp;").capnp is False

    def test_commented_and_active_directive(self):
        text = SCHEMA_HEADER + "# $Codec.capnp;\n$Codec.capnp;\n" + STRUCTS
        assert scan(text).capnp is True

    def test_directive_on_first_line(self):
        assert scan("$Codec.msgp;\nstruct A {}\n").msgp is True

    def test_directive_without_semicolon_is_not_recognized(self):
        assert scan(SCHEMA_HEADER + "$Codec.capnp\n" + STRUCTS).capnp is False

    def test_requested_tags(self):
        directives = scan("$Codec.capnp;\n$Codec.msgp;\n")
        assert directives.requested == frozenset({Directive.CAPNP, Directive.MSGP})


class TestExtractTypeNames:
    """Tests for struct name extraction."""

    def test_declaration_order(self):
        assert extract_type_names(STRUCTS) == ["User", "Group"]

    def test_duplicates_are_kept(self):
        text = "struct User {}\nstruct UserProfile {}\nstruct User {}\n"
        assert extract_type_names(text) == ["User", "UserProfile", "User"]

    def test_names_stop_at_non_letters(self):
        assert extract_type_names("struct Point3D {}") == ["Point"]

    def test_commented_declarations_are_included(self):
        assert extract_type_names("# struct Legacy {}\nstruct Current {}\n") == ["Legacy", "Current"]

    def test_no_structs(self):
        assert extract_type_names("enum Color { red @0; }") == []


class TestSchemaSource:
    """Tests for SchemaSource."""

    def test_name_drops_capnp_extension(self):
        assert SchemaSource(path=Path("model.capnp"), text="").name == "model"

    def test_name_keeps_schema_directory(self):
        source = SchemaSource(path=Path("schemas/model.capnp"), text="")
        assert source.name == "schemas/model"

    def test_name_of_absolute_path_drops_root(self):
        source = SchemaSource(path=Path("/src/schemas/model.capnp"), text="")
        assert source.name == "src/schemas/model"

    def test_name_only_drops_trailing_extension(self):
        source = SchemaSource(path=Path("v1.capnp/model.capnp"), text="")
        assert source.name == "v1.capnp/model"

    def test_name_without_capnp_extension(self):
        source = SchemaSource(path=Path("model.txt"), text="")
        assert source.name == "model.txt"

    def test_read(self, tmp_path):
        path = tmp_path / "model.capnp"
        path.write_text(STRUCTS, encoding="utf-8")

        source = SchemaSource.read(str(path))

        assert source.path == path
        assert source.text == STRUCTS
        assert source.name == (tmp_path / "model").relative_to(tmp_path.anchor).as_posix()

    def test_read_keeps_undecodable_bytes(self, tmp_path):
        path = tmp_path / "model.capnp"
        path.write_bytes(b"# caf\xe9\n$Codec.capnp;\nstruct User {}\n")

        source = SchemaSource.read(path)

        assert source.text.encode("utf-8", "surrogateescape").startswith(b"# caf\xe9\n")
        assert scan(source.text).capnp
        assert extract_type_names(source.text) == ["User"]

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            SchemaSource.read(tmp_path / "missing.capnp")


if __name__ == "__main__":
    pytest.main([__file__])
