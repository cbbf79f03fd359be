"""
CLI utilities for command line display and usage text.
"""

import shlex
from collections.abc import Sequence
from pathlib import Path

import jinja2

from .pipeline.config import CAPNP_SUFFIX, MSGP_SUFFIX, PLAIN_SUFFIX
from .pipeline.scanner import CAPNP_CODEC_MARKER, MSGP_CODEC_MARKER

TEMPLATE_DIR = Path(__file__).parent / "templates"


def format_command_line(args: Sequence[str]) -> str:
    """
    Format a command line the way a shell would accept it.

    Args:
        args: Command name followed by its arguments

    Returns:
        Command line string with arguments quoted where needed
    """
    return " ".join(shlex.quote(str(arg)) for arg in args)


def render_usage(program: str = "caps") -> str:
    """
    Render the usage text shown when no schema is given.

    Args:
        program: Program name shown in the text

    Returns:
        Usage text
    """
    jinja_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
    )
    template = jinja_env.get_template("usage.txt.jinja2")
    return template.render(
        program=program,
        markers=[
            (CAPNP_CODEC_MARKER, f"<name>{CAPNP_SUFFIX}", "Cap'n Proto Go bindings, types suffixed with Capn"),
            (MSGP_CODEC_MARKER, f"<name>{MSGP_SUFFIX}", "MessagePack encoders for the plain Go structs"),
        ],
        plain_artifact=f"<name>{PLAIN_SUFFIX}",
    )
