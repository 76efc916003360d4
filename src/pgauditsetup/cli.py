import logging
import os

import click
from rich.logging import RichHandler

from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_CUSTOM_CONFIG,
    DEFAULT_DATABASE,
    DEFAULT_PASSWORD,
    DEFAULT_POSTGRES_VERSION,
    DEFAULT_RESTART_DELAY,
    DEFAULT_USER,
)
from .core import PgAuditSetup, SetupError
from .errors_catalog import actionable_error
from .models import RunConfig
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--container", "-c", required=False, help="Name of the PostgreSQL container (required)")
@click.option("--user", "-u", required=False, help=f"PostgreSQL username (default: {DEFAULT_USER})")
@click.option(
    "--database",
    "-d",
    required=False,
    help=f"PostgreSQL database name (default: {DEFAULT_DATABASE})",
)
@click.option(
    "--password",
    "-p",
    required=False,
    help=f"PostgreSQL password (default: {DEFAULT_PASSWORD})",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--custom-config",
    required=False,
    type=click.Path(),
    help=f"Local postgresql.conf pushed into the container (default: {DEFAULT_CUSTOM_CONFIG})",
)
@click.option(
    "--postgres-version",
    required=False,
    default=None,
    help=f"PostgreSQL major version running in the container (default: {DEFAULT_POSTGRES_VERSION})",
)
@click.option(
    "--restart-delay",
    required=False,
    type=float,
    default=None,
    help=f"Seconds to wait after restarting the container (default: {DEFAULT_RESTART_DELAY:g})",
)
@click.option(
    "--no-log-file",
    is_flag=True,
    default=None,
    help="Do not write the per-run log file under logs/.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Print the setup plan without running any command.",
)
def main(
    container,
    user,
    database,
    password,
    config,
    custom_config,
    postgres_version,
    restart_delay,
    no_log_file,
    verbose,
    dry_run,
):
    """Install and configure pgAudit inside a running PostgreSQL container."""
    logger = logging.getLogger("pgauditsetup")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except SetupError as exc:
        raise click.ClickException(str(exc)) from exc

    container = _resolve_option(container, config_values, "container")
    user = str(_resolve_option(user, config_values, "user", default=DEFAULT_USER))
    database = str(_resolve_option(database, config_values, "database", default=DEFAULT_DATABASE))
    password = str(_resolve_option(password, config_values, "password", default=DEFAULT_PASSWORD))
    custom_config = _resolve_option(
        custom_config, config_values, "custom_config", default=DEFAULT_CUSTOM_CONFIG
    )
    postgres_version = str(
        _resolve_option(
            postgres_version,
            config_values,
            "postgres_version",
            default=DEFAULT_POSTGRES_VERSION,
        )
    )
    restart_delay = float(
        _resolve_option(restart_delay, config_values, "restart_delay", default=DEFAULT_RESTART_DELAY)
    )
    no_log_file = bool(_resolve_option(no_log_file, config_values, "no_log_file", default=False))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    dry_run = bool(_resolve_option(dry_run, config_values, "dry_run", default=False))

    if not container:
        raise click.ClickException(actionable_error("container_required"))

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    setup = PgAuditSetup(
        config=RunConfig(
            container=str(container),
            user=user,
            database=database,
            password=password,
        ),
        custom_config=custom_config,
        postgres_version=postgres_version,
        restart_delay=restart_delay,
        log_to_file=not no_log_file,
        dry_run=dry_run,
    )

    raise SystemExit(setup.run())


if __name__ == "__main__":
    main()
