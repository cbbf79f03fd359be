"""caps - Cap'n Proto and MessagePack Go code generation driver

Reads a .capnp schema, runs capnp to generate plain Go structs and, when the
schema asks for them with codec directives, Cap'n Proto bindings (renamed to
avoid clashing with the plain structs) and msgp encoders.
"""

__version__ = "1.0.0"

from .pipeline import (
    DirectiveSet,
    DisambiguationMode,
    PipelineConfig,
    PipelineController,
    PipelineError,
    PipelineOutcome,
    PipelineState,
    SchemaSource,
    disambiguate,
    scan,
)

__all__ = [
    "PipelineController",
    "PipelineConfig",
    "PipelineError",
    "PipelineOutcome",
    "PipelineState",
    "DisambiguationMode",
    "DirectiveSet",
    "SchemaSource",
    "scan",
    "disambiguate",
]
