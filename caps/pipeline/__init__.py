"""
Pipeline - capnp/msgp code generation driver.

A run goes through these phases:

1. Scan: detect the codec directives of the schema ($Codec.capnp;, $Codec.msgp;)
2. Plain generation: capnp with the pgo plugin writes <name>.go
3. Cap'n Proto generation (optional): capnp again with the go plugin, then the
   declared struct names in <name>.capnp.go get the Capn suffix
4. MessagePack generation (optional): msgp reads <name>.go and writes <name>.msgp.go
"""

from __future__ import annotations

from .config import CapnpConfig, DisambiguationMode, MsgpConfig, PipelineConfig
from .controller import PipelineController, PipelineError, PipelineOutcome, PipelineState
from .disambiguator import disambiguate
from .scanner import Directive, DirectiveSet, SchemaSource, extract_type_names, scan, strip_comments

__all__ = [
    "PipelineController",
    "PipelineConfig",
    "CapnpConfig",
    "MsgpConfig",
    "DisambiguationMode",
    "PipelineError",
    "PipelineOutcome",
    "PipelineState",
    "Directive",
    "DirectiveSet",
    "SchemaSource",
    "scan",
    "strip_comments",
    "extract_type_names",
    "disambiguate",
]
