"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

ENVIRONMENT_VARIABLE: Final[str] = "CREATORSYNC_ENV"
DEFAULT_ENVIRONMENT: Final[str] = "development"
ENV_FILES: Final[dict[str, str]] = {
    "development": ".env.local",
    "production": ".env.production",
}


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def optional_env_var(name: str) -> str | None:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_environment(
    environment: str | None = None,
    *,
    base_dir: Path | None = None,
) -> Path:
    """Load the ``.env`` file matching ``environment`` and return its path.

    ``development`` reads ``.env.local`` and ``production`` reads ``.env.production``.
    Values already present in the process environment win over the file.
    """

    name = environment or os.getenv(ENVIRONMENT_VARIABLE) or DEFAULT_ENVIRONMENT
    try:
        filename = ENV_FILES[name]
    except KeyError:
        choices = ", ".join(sorted(ENV_FILES))
        msg = f"Unknown environment {name!r} (expected one of: {choices})"
        raise ConfigurationError(msg) from None

    env_path = (base_dir or Path.cwd()) / filename
    loaded = load_dotenv(env_path, override=False)
    log.info("Environment: %s (env file %s%s)", name, env_path, "" if loaded else ", not found")
    return env_path
