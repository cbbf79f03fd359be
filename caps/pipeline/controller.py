"""
Pipeline controller sequencing the capnp and msgp generators.

A run goes through these states:

    INIT -> PRIMARY_GENERATED -> [DISAMBIGUATED] -> [SECONDARY_GENERATED] -> DONE

Any failure moves the run to ABORTED and stops it. The optional states are
entered only when the schema carries the matching codec directive; directives
are scanned once, before the first external command runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..logging import get_logger
from .config import CAPNP_SUFFIX, MSGP_SUFFIX, PLAIN_SUFFIX, PipelineConfig
from .disambiguator import disambiguate
from .runners import CommandRunner, StageResult, SubprocessRunner, capnp_command, msgp_command
from .scanner import DirectiveSet, SchemaSource, extract_type_names, scan
from .writer import AtomicWriter

logger = get_logger("pipeline")

OUTPUT_DIR_FAILED = "failed to create output directory"
PRIMARY_FAILED = "primary generation failed"
ARTIFACT_IO_FAILED = "failed to read/write primary-optional artifact"
SECONDARY_FAILED = "secondary generation failed"


class PipelineState(str, Enum):
    """States of a pipeline run."""

    INIT = "init"
    PRIMARY_GENERATED = "primary_generated"
    DISAMBIGUATED = "disambiguated"
    SECONDARY_GENERATED = "secondary_generated"
    DONE = "done"
    ABORTED = "aborted"


class PipelineError(Exception):
    """Raised for a pipeline run that aborted.

    Attributes:
        cause: Short description of the failed action
        detail: Underlying error, if any
        state: Last state reached before the failure
    """

    def __init__(self, cause: str, detail: str | None = None, state: PipelineState = PipelineState.INIT):
        self.cause = cause
        self.detail = detail
        self.state = state
        super().__init__(f"{cause}: {detail}" if detail else cause)


@dataclass
class PipelineOutcome:
    """Result of a pipeline run.

    Attributes:
        directives: Optional stages requested by the schema
        history: States entered, in order
        artifacts: Files written by completed stages
        error: The failure, when the run aborted
    """

    directives: DirectiveSet
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.INIT])
    artifacts: list[Path] = field(default_factory=list)
    error: PipelineError | None = None

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    @property
    def ok(self) -> bool:
        return self.state == PipelineState.DONE

    def raise_for_error(self) -> None:
        """Raise the PipelineError of an aborted run."""
        if self.error is not None:
            raise self.error

    def enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline state: %s -> %s", self.state.value, state.value)
        self.history.append(state)

    def abort(self, cause: str, detail: str | None = None) -> PipelineOutcome:
        self.error = PipelineError(cause, detail, self.state)
        logger.debug("Pipeline aborted in state %s: %s", self.state.value, self.error)
        self.history.append(PipelineState.ABORTED)
        return self


class PipelineController:
    """Runs the generation stages for one schema at a time."""

    def __init__(
        self,
        config: PipelineConfig | None = None,
        runner: CommandRunner | None = None,
        writer: AtomicWriter | None = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Pipeline configuration
            runner: Runs external commands, a SubprocessRunner by default
            writer: Reads and rewrites generated artifacts
        """
        self.config = config or PipelineConfig()
        self.runner = runner or SubprocessRunner()
        self.writer = writer or AtomicWriter()

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir)

    def artifact_path(self, source: SchemaSource, suffix: str) -> Path:
        """Path of the artifact ``<output dir>/<schema path without .capnp><suffix>``."""
        return self.output_dir / f"{source.name}{suffix}"

    def run(self, source: SchemaSource) -> PipelineOutcome:
        """
        Run every stage requested by ``source``.

        Failures never raise; they end the run in the ABORTED state with
        ``outcome.error`` set.

        Args:
            source: The schema to generate code for

        Returns:
            PipelineOutcome of the run
        """
        directives = scan(source.text)
        outcome = PipelineOutcome(directives=directives)
        logger.debug(
            "Schema %s requests: %s",
            source.name,
            ", ".join(sorted(d.value for d in directives.requested)) or "plain Go only",
        )

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return outcome.abort(OUTPUT_DIR_FAILED, str(e))

        result = self.runner.run(capnp_command(self.config, source.path))
        if not result.ok:
            return outcome.abort(PRIMARY_FAILED, result.error)
        outcome.artifacts.append(self.artifact_path(source, PLAIN_SUFFIX))
        outcome.enter(PipelineState.PRIMARY_GENERATED)

        if directives.capnp:
            result = self.runner.run(capnp_command(self.config, source.path, with_codec=True))
            if not result.ok:
                return outcome.abort(PRIMARY_FAILED, result.error)

            capnp_path = self.artifact_path(source, CAPNP_SUFFIX)
            try:
                self._disambiguate_artifact(source, capnp_path)
            except (OSError, UnicodeError) as e:
                return outcome.abort(ARTIFACT_IO_FAILED, f"{capnp_path}: {e}")
            outcome.artifacts.append(capnp_path)
            outcome.enter(PipelineState.DISAMBIGUATED)

        if directives.msgp:
            msgp_path = self.artifact_path(source, MSGP_SUFFIX)
            result = self._run_msgp(self.artifact_path(source, PLAIN_SUFFIX), msgp_path)
            if not result.ok:
                return outcome.abort(SECONDARY_FAILED, result.error)
            outcome.artifacts.append(msgp_path)
            outcome.enter(PipelineState.SECONDARY_GENERATED)

        outcome.enter(PipelineState.DONE)
        return outcome

    def _disambiguate_artifact(self, source: SchemaSource, path: Path) -> None:
        # Called once per run; a second pass would suffix names twice
        type_names = extract_type_names(source.text)
        logger.debug("Adding suffix %r to %d type names in %s", self.config.suffix, len(type_names), path)
        self.writer.rewrite(
            path,
            lambda content: disambiguate(type_names, content, self.config.suffix, self.config.disambiguation),
        )

    def _run_msgp(self, input_path: Path, output_path: Path) -> StageResult:
        # msgp is chatty; its stdout only shows up in verbose mode
        return self.runner.run(
            msgp_command(self.config, input_path, output_path),
            forward_stdout=self.config.verbose,
        )
