from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, cast

import yaml

from .env_auth import EnvAuthConfig, create_env_auth_manager

CONFIG_ENV_VAR = "JIWA_CONFIG"
DEFAULT_API_VERSION = "2"
DEFAULT_ISSUE_TYPE = "Task"
DEFAULT_TIMEOUT = 3.0
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class JiwaConfig:
    base_url: str
    username: str
    password: str
    source_file: Path | None = None
    api_version: str = DEFAULT_API_VERSION
    endpoint_prefix: str = ""
    default_project: str | None = None
    issue_type: str = DEFAULT_ISSUE_TYPE
    timeout: float = DEFAULT_TIMEOUT
    # Logging configuration
    logging_json_enabled: bool = False
    logging_level: str = DEFAULT_LOG_LEVEL
    # Environment authentication configuration
    env_auth_load_dotenv: bool = True
    env_auth_dotenv_path: str | None = None

    @property
    def api_root(self) -> str:
        """Base of every REST call, e.g. ``https://jira.example.com/rest/api/2``."""
        return f"{self.base_url}{self.endpoint_prefix}/rest/api/{self.api_version}"


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError(
            f"cannot locate user home dir, is `$HOME` set? Detailed error: {exc}"
        ) from exc
    return home / ".config" / "jiwa" / "config.json"


def _missing_values_message(path: Path | None) -> str:
    return (
        'Config is missing important values, "baseURL", "username" and "password" need to be set.\n'
        '"username" and "password" can be configured through their respective environment '
        'variables "JIWA_USERNAME" and "JIWA_PASSWORD".\n'
        f"The configuration file is located at {path}"
    )


def _read_raw(p: Path) -> dict[str, Any]:
    if not p.exists():
        raise ConfigError(
            f"cannot locate configuration file, was it created under {p}?"
        )
    try:
        loaded = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to read configuration file: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"failed to read configuration file: {p} must contain an object")
    return cast(dict[str, Any], loaded)


def _section(raw: Mapping[str, Any], name: str, p: Path) -> dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"failed to read configuration file: {p}: {name!r} must be an object")
    return cast(dict[str, Any], value)


def load_config(
    path: str | Path | None = None, *, environ: Mapping[str, str] | None = None
) -> JiwaConfig:
    """Load the per-user configuration and apply environment overrides.

    The file is read with ``yaml.safe_load``; JSON documents are valid YAML so
    the historical ``config.json`` keeps working unchanged.
    """
    p = Path(path).expanduser() if path else default_config_path(environ)
    raw = _read_raw(p)
    logging_config = _section(raw, "logging", p)
    env_auth = _section(raw, "environment", p)

    try:
        timeout = float(raw.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"failed to read configuration file: invalid timeout: {exc}") from exc

    cfg = JiwaConfig(
        base_url=str(raw.get("baseURL") or "").rstrip("/"),
        username=str(raw.get("username") or ""),
        password=str(raw.get("password") or ""),
        source_file=p,
        api_version=str(raw.get("apiVersion") or DEFAULT_API_VERSION),
        endpoint_prefix=str(raw.get("endpointPrefix") or "").rstrip("/"),
        default_project=raw.get("defaultProject") or None,
        issue_type=str(raw.get("issueType") or DEFAULT_ISSUE_TYPE),
        timeout=timeout,
        logging_json_enabled=bool(logging_config.get("json_enabled", False)),
        logging_level=str(logging_config.get("level", DEFAULT_LOG_LEVEL)),
        env_auth_load_dotenv=bool(env_auth.get("load_dotenv", True)),
        env_auth_dotenv_path=env_auth.get("dotenv_path"),
    )
    cfg = apply_env_overrides(cfg, environ=environ)
    validate_config(cfg)
    return cfg


def apply_env_overrides(
    cfg: JiwaConfig, *, environ: Mapping[str, str] | None = None
) -> JiwaConfig:
    manager = create_env_auth_manager(
        EnvAuthConfig(
            load_dotenv=cfg.env_auth_load_dotenv,
            dotenv_path=cfg.env_auth_dotenv_path,
        ),
        environ=environ,
    )
    username = manager.get_username()
    password = manager.get_password()
    overrides: dict[str, Any] = {}
    if username is not None:
        overrides["username"] = username
    if password is not None:
        overrides["password"] = password
    return replace(cfg, **overrides) if overrides else cfg


def validate_config(cfg: JiwaConfig) -> None:
    if not cfg.base_url or not cfg.username or not cfg.password:
        raise ConfigError(_missing_values_message(cfg.source_file))


__all__ = [
    "ConfigError",
    "JiwaConfig",
    "default_config_path",
    "load_config",
    "apply_env_overrides",
    "validate_config",
]
