"""Root CLI group for simprep."""

import click

from simprep import __version__


@click.group()
@click.option("--config", type=click.Path(exists=True), default=None,
              help="Path to YAML configuration file.")
@click.option("--log-level", type=click.Choice(
    ["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), default=None)
@click.option("--quiet", is_flag=True, help="Suppress progress bars.")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="simprep")
@click.pass_context
def cli(ctx, config, log_level, quiet, verbose):
    """simprep - Tversky similarity matrices and interaction prediction

    Compute Tversky index (Tanimoto, Dice, ...) similarity matrices between
    fingerprint bit matrices, and feed them into a SimSpread-style
    prediction backend.
    """
    from simprep.core.config import RunConfig
    from simprep.core.exceptions import ConfigurationError
    from simprep.core.logging import setup_logging

    ctx.ensure_object(dict)
    try:
        run_config = RunConfig.from_yaml(config) if config else RunConfig()
    except ConfigurationError as e:
        raise click.ClickException(f"config failed for {config}: {e}")

    if log_level is None:
        log_level = run_config.log_level
    if verbose:
        log_level = "DEBUG"
    ctx.obj["log_level"] = log_level
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = run_config

    setup_logging(level=log_level, log_file=run_config.log_file)


# Register commands
from simprep.cli.similarity_commands import tversky  # noqa: E402
from simprep.cli.predict_commands import predict  # noqa: E402

cli.add_command(tversky)
cli.add_command(predict)


def main():
    cli()


if __name__ == "__main__":
    main()
