import json

import click

from .cli_utils import render_usage
from .logging import configure_logging, get_logger
from .pipeline import DisambiguationMode, PipelineConfig, PipelineController, PipelineError, SchemaSource

logger = get_logger("cli")


def load_config(path):
    """Load a PipelineConfig from a JSON file."""
    try:
        with open(path) as f:
            return PipelineConfig.from_dict(json.load(f))
    except (OSError, ValueError, TypeError) as e:
        raise click.ClickException(f"failed to load config file {path}: {e}") from e


@click.command()
@click.option("-o", "output_dir", default=None, type=click.Path(), help="Output directory, created if need be")
@click.option("-source", "--source", "source", default=None, type=click.Path(), help="Input .capnp schema file")
@click.option("-verbose", "--verbose", "verbose", is_flag=True, default=False, help="Echo every external command")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--schema-dir", envvar="CAPS_SCHEMA_DIR", default=None, help="Include directory holding the caps schemas")
@click.option("--go-capnp-dir", envvar="CAPS_GO_CAPNP_DIR", default=None, help="Include directory holding go-capnproto schemas")
@click.option(
    "--token-boundary",
    is_flag=True,
    default=False,
    help="Only rename whole identifiers when adding the Capn suffix",
)
@click.pass_context
def caps(ctx, output_dir, source, verbose, config, schema_dir, go_capnp_dir, token_boundary):
    if source is None:
        click.echo(render_usage(), err=True, nl=False)
        ctx.exit(1)

    if config is not None:
        config = load_config(config)
    else:
        config = PipelineConfig()

    # CLI flags override the config file
    if output_dir is not None:
        config.output_dir = output_dir
    if verbose:
        config.verbose = True
    if schema_dir is not None:
        config.capnp.schema_dir = schema_dir
    if go_capnp_dir is not None:
        config.capnp.go_capnp_dir = go_capnp_dir
    if token_boundary:
        config.disambiguation = DisambiguationMode.TOKEN_BOUNDARY

    configure_logging(verbose=config.verbose)

    try:
        schema = SchemaSource.read(source)
    except (OSError, UnicodeError) as e:
        raise click.ClickException(f"failed to read schema file: {e}") from e

    controller = PipelineController(config)
    if not controller.runner.is_available(config.capnp.command):
        logger.warning("%s not found on PATH", config.capnp.command)

    outcome = controller.run(schema)
    try:
        outcome.raise_for_error()
    except PipelineError as e:
        raise click.ClickException(str(e)) from e

    for artifact in outcome.artifacts:
        logger.info("Wrote %s", artifact)
