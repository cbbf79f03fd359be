"""
Configuration for the caps generation pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_OUTPUT_DIR = "."

# Artifact file name suffixes, appended to the schema name
PLAIN_SUFFIX = ".go"
CAPNP_SUFFIX = ".capnp.go"
MSGP_SUFFIX = ".msgp.go"


class DisambiguationMode(str, Enum):
    """How declared type names are matched in generated code.

    SEQUENTIAL replaces raw substrings in declaration order, so a name that is
    a substring of another name also rewrites the longer one.
    """

    SEQUENTIAL = "sequential"  # Default: plain substring replacement
    TOKEN_BOUNDARY = "token_boundary"  # Only whole identifiers are renamed


@dataclass
class CapnpConfig:
    """Configuration for the capnp schema compiler."""

    # Executable name or path
    command: str = "capnp"

    # Directory holding the caps schema definitions (codec annotations)
    schema_dir: str = "."

    # Directory holding the go-capnproto schema definitions
    go_capnp_dir: str = "vendor/github.com/glycerine/go-capnproto"

    # Plugin producing plain Go structs (<name>.go)
    plain_plugin: str = "pgo"

    # Plugin producing Cap'n Proto Go bindings (<name>.capnp.go)
    codec_plugin: str = "go"


@dataclass
class MsgpConfig:
    """Configuration for the msgp code generator."""

    command: str = "msgp"

    # Whether msgp should also emit its _test.go file
    generate_tests: bool = False


@dataclass
class PipelineConfig:
    """Configuration options for a caps run."""

    # Directory generated files are written to
    output_dir: str = DEFAULT_OUTPUT_DIR

    # Echo every external command line before running it
    verbose: bool = False

    # Identifier matching used when renaming Cap'n Proto types
    disambiguation: DisambiguationMode = DisambiguationMode.SEQUENTIAL

    # Suffix appended to Cap'n Proto type names
    suffix: str = "Capn"

    capnp: CapnpConfig = field(default_factory=CapnpConfig)
    msgp: MsgpConfig = field(default_factory=MsgpConfig)

    @property
    def has_custom_output_dir(self) -> bool:
        return self.output_dir != DEFAULT_OUTPUT_DIR

    @staticmethod
    def from_dict(d: dict) -> PipelineConfig:
        """Create a config from a dictionary."""
        config = PipelineConfig()
        for k, v in d.items():
            if k == "capnp" and isinstance(v, dict):
                config.capnp = CapnpConfig(**v)
            elif k == "msgp" and isinstance(v, dict):
                config.msgp = MsgpConfig(**v)
            elif k == "disambiguation":
                config.disambiguation = DisambiguationMode(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "output_dir": self.output_dir,
            "verbose": self.verbose,
            "disambiguation": self.disambiguation.value,
            "suffix": self.suffix,
            "capnp": {
                "command": self.capnp.command,
                "schema_dir": self.capnp.schema_dir,
                "go_capnp_dir": self.capnp.go_capnp_dir,
                "plain_plugin": self.capnp.plain_plugin,
                "codec_plugin": self.capnp.codec_plugin,
            },
            "msgp": {
                "command": self.msgp.command,
                "generate_tests": self.msgp.generate_tests,
            },
        }
