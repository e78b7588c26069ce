import logging
import os

import click
from rich.logging import RichHandler

from .core import ReleaseResumer
from .errors import ResumerError
from .services.config_loader import ConfigLoader
from .services.publisher import DEFAULT_REQUEST_TIMEOUT

DEFAULT_CONFIG_FILE = ".playresumer.yml"


def _resolve_option(cli_value, config, key, default=None):
    # GitHub Actions exports unset inputs as empty strings.
    if cli_value is not None and cli_value != "":
        return cli_value
    if key in config:
        return config[key]
    return default


def _parse_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise click.ClickException(f"Invalid request_timeout: {value!r}") from None
    if timeout <= 0:
        raise click.ClickException(f"Invalid request_timeout: {value!r}")
    return timeout


def _github_error_command(message: str) -> str:
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"::error::{escaped}"


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--package-name",
    envvar="INPUT_PACKAGE-NAME",
    required=False,
    help="Application package name, e.g. com.example.app.",
)
@click.option(
    "--version-name",
    envvar="INPUT_VERSION-NAME",
    required=False,
    help="Version name of the halted release to resume.",
)
@click.option(
    "--track",
    envvar="INPUT_TRACK",
    required=False,
    help="Release track (default: production).",
)
@click.option(
    "--google-account-json-file-path",
    envvar="INPUT_GOOGLE-ACCOUNT-JSON-FILE-PATH",
    required=False,
    type=click.Path(),
    help="Path to the Google service account JSON key.",
)
@click.option(
    "--google-account-json",
    envvar="INPUT_GOOGLE-ACCOUNT-JSON",
    required=False,
    help="Google service account JSON key contents.",
)
@click.option(
    "--application-credentials",
    envvar="GOOGLE_APPLICATION_CREDENTIALS",
    required=False,
    type=click.Path(),
    help="Credentials file that takes priority over both account inputs. "
    "Defaults to GOOGLE_APPLICATION_CREDENTIALS.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--request-timeout",
    required=False,
    type=float,
    default=None,
    help=f"Timeout in seconds for each Google Play API request (default: {DEFAULT_REQUEST_TIMEOUT:g}).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(
    package_name,
    version_name,
    track,
    google_account_json_file_path,
    google_account_json,
    application_credentials,
    config,
    request_timeout,
    verbose,
    log_file,
):
    """Resume a halted staged rollout on Google Play."""
    logger = logging.getLogger("playresumer")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except ResumerError as exc:
        raise click.ClickException(str(exc)) from exc

    package_name = _resolve_option(package_name, config_values, "package_name")
    version_name = _resolve_option(version_name, config_values, "version_name")
    track = _resolve_option(track, config_values, "track", default="production")
    google_account_json_file_path = _resolve_option(
        google_account_json_file_path,
        config_values,
        "google_account_json_file_path",
    )
    request_timeout = _parse_timeout(
        _resolve_option(
            request_timeout,
            config_values,
            "request_timeout",
            default=DEFAULT_REQUEST_TIMEOUT,
        )
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if not package_name:
        raise click.ClickException(
            "Missing required option '--package-name' (or provide it in config)."
        )
    if not version_name:
        raise click.ClickException(
            "Missing required option '--version-name' (or provide it in config)."
        )

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    resumer = ReleaseResumer(
        package_name=package_name,
        version_name=version_name,
        track=track,
        google_account_json=google_account_json or None,
        google_account_json_file_path=google_account_json_file_path or None,
        application_credentials=application_credentials or None,
        request_timeout=request_timeout,
    )

    exit_code = resumer.run()
    if exit_code != 0 and os.environ.get("GITHUB_ACTIONS") == "true":
        click.echo(_github_error_command(resumer.failure_message or "Release resume failed."))

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
