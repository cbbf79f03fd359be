"""
Command lines for the capnp and msgp generators.
"""

from __future__ import annotations

from pathlib import Path

from ..config import PipelineConfig


def capnp_command(config: PipelineConfig, schema_path: str | Path, with_codec: bool = False) -> list[str]:
    """
    Build the ``capnp compile`` command line.

    The plain Go plugin always runs; ``with_codec`` adds the Cap'n Proto Go
    plugin. With a non-default output directory the directory is appended
    directly to each output flag.

    Args:
        config: Pipeline configuration
        schema_path: Schema file passed to capnp
        with_codec: Whether to also request <name>.capnp.go

    Returns:
        Command name followed by its arguments
    """
    capnp = config.capnp
    output_flags = [f"-o{capnp.plain_plugin}"]
    if with_codec:
        output_flags.append(f"-o{capnp.codec_plugin}")

    if config.has_custom_output_dir:
        output_flags = [flag + config.output_dir for flag in output_flags]

    return [
        capnp.command,
        f"-I{capnp.schema_dir}",
        f"-I{capnp.go_capnp_dir}",
        "compile",
        *output_flags,
        str(schema_path),
    ]


def msgp_command(config: PipelineConfig, input_path: str | Path, output_path: str | Path) -> list[str]:
    """Build the msgp command line reading ``input_path``."""
    return [
        config.msgp.command,
        f"-o={output_path}",
        f"-tests={'true' if config.msgp.generate_tests else 'false'}",
        f"-file={input_path}",
    ]
