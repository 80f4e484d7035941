"""Environment-based credentials for jiwa.

``JIWA_USERNAME`` / ``JIWA_PASSWORD`` take precedence over the values stored in
the configuration file. A ``.env`` file, when present, is loaded first so the
variables can live next to a project checkout instead of in the shell profile.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .logging import get_logger

DOTENV_CANDIDATES = (".env", ".env.local")


@dataclass(frozen=True)
class EnvAuthConfig:
    """Configuration for environment-based authentication."""

    load_dotenv: bool = True
    dotenv_path: str | None = None
    username_var: str = "JIWA_USERNAME"
    password_var: str = "JIWA_PASSWORD"


class EnvironmentAuthManager:
    """Resolves credential overrides from the process environment."""

    def __init__(self, config: EnvAuthConfig, environ: Mapping[str, str] | None = None):
        self.config = config
        self.logger = get_logger()
        self._environ = environ
        self._dotenv_loaded = False

        if config.load_dotenv:
            self._load_dotenv()

    @property
    def dotenv_loaded(self) -> bool:
        return self._dotenv_loaded

    def _env(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def _load_dotenv(self) -> None:
        """Load the first .env file found; existing variables are not overridden."""
        candidates = (self.config.dotenv_path,) if self.config.dotenv_path else DOTENV_CANDIDATES
        for location in candidates:
            env_path = Path(location).expanduser()
            if env_path.is_file():
                load_dotenv(str(env_path), override=False)
                self._dotenv_loaded = True
                self.logger.debug(f"Loaded environment variables from {env_path}")
                return
        if self.config.dotenv_path:
            self.logger.warning("configured dotenv file not found", path=self.config.dotenv_path)

    def get_username(self) -> str | None:
        value = self._env().get(self.config.username_var)
        if value is not None:
            self.logger.debug(f"Using username from {self.config.username_var}")
        return value

    def get_password(self) -> str | None:
        value = self._env().get(self.config.password_var)
        if value is not None:
            self.logger.debug(f"Using password from {self.config.password_var}")
        return value


def create_env_auth_manager(
    config: EnvAuthConfig | None = None, environ: Mapping[str, str] | None = None
) -> EnvironmentAuthManager:
    """Factory function to create environment authentication manager."""
    if config is None:
        config = EnvAuthConfig()
    return EnvironmentAuthManager(config, environ=environ)


__all__ = ["EnvAuthConfig", "EnvironmentAuthManager", "create_env_auth_manager"]
