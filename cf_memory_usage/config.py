import json
import os
import subprocess
from typing import NamedTuple

from cf_memory_usage.errors import ConfigurationError

DEFAULT_TIMEOUT = 30
TRUTHY = ("1", "true", "yes", "on")


class Settings(NamedTuple):
    api: str
    authorization: str
    skip_ssl_validation: bool = False
    timeout: float = DEFAULT_TIMEOUT


def cf_config_path(environ=None) -> str:
    """Location of the cf CLI config, honoring CF_HOME like the CLI does."""
    environ = os.environ if environ is None else environ
    home = environ.get("CF_HOME") or os.path.expanduser("~")
    return os.path.join(home, ".cf", "config.json")


def load_cf_config(path: str = None) -> dict:
    path = path or cf_config_path()
    try:
        with open(path, "r", encoding="utf-8") as config_file:
            return json.load(config_file)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Unable to parse CF CLI config {path}: {exc}")


def fetch_token() -> str:
    """Ask the cf CLI for a fresh OAuth token."""
    try:
        result = subprocess.run(
            ["cf", "oauth-token"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError:
        raise ConfigurationError("Need CF_TOKEN or a logged-in `cf` CLI")
    if result.returncode != 0:
        raise ConfigurationError(
            f"Error retrieving CF access token: {result.stderr.strip()}. Run 'cf login'."
        )
    return result.stdout.strip()


def bearer(token: str) -> str:
    token = token.strip()
    return token if token.lower().startswith("bearer ") else f"bearer {token}"


def load_settings(environ=None) -> Settings:
    """
    Resolve API endpoint, token and TLS settings.

    Environment variables (CF_API, CF_TOKEN, CF_SKIP_SSL_VALIDATION,
    CF_TIMEOUT) win over the cf CLI config and `cf oauth-token`. The cf CLI
    config is only read when CF_API is unset; its SSLDisabled flag belongs to
    its own Target.
    """
    environ = os.environ if environ is None else environ
    cf_config = {} if environ.get("CF_API") else load_cf_config(cf_config_path(environ))

    api = environ.get("CF_API") or cf_config.get("Target")
    if not api:
        raise ConfigurationError(
            "Cloud Foundry API target not configured. Export CF_API or run 'cf target'."
        )

    token = environ.get("CF_TOKEN") or fetch_token()
    if not token:
        raise ConfigurationError("Empty access token. Run 'cf login'.")

    if "CF_SKIP_SSL_VALIDATION" in environ:
        skip_ssl = environ["CF_SKIP_SSL_VALIDATION"].lower() in TRUTHY
    else:
        skip_ssl = bool(cf_config.get("SSLDisabled"))

    try:
        timeout = float(environ.get("CF_TIMEOUT", DEFAULT_TIMEOUT))
    except ValueError:
        raise ConfigurationError(f"CF_TIMEOUT must be a number of seconds, got {environ['CF_TIMEOUT']!r}")

    return Settings(
        api=api.rstrip("/"),
        authorization=bearer(token),
        skip_ssl_validation=skip_ssl,
        timeout=timeout,
    )
