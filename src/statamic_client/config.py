"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for statamic_client:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.statamic-client/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_data_dir`, :func:`get_profiles_dir`.
* **Global config** -- a single :class:`~statamic_client.models.GlobalConfig`
  JSON file holding the default profile and output format.
* **Profiles** -- one JSON file per Statamic site, each deserialised into a
  :class:`~statamic_client.models.Profile`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from statamic_client.exceptions import ConfigError
from statamic_client.models import GlobalConfig, Profile

_APP_NAME = "statamic-client"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "statamic.json"

ENV_PROFILE = "STATAMIC_PROFILE"
ENV_API_URL = "STATAMIC_API_URL"
ENV_SITE = "STATAMIC_SITE"

# Name given to a profile assembled from --api-url / STATAMIC_API_URL alone.
ADHOC_PROFILE_NAME = "default"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/statamic-client/`` (default
    ``~/.config/statamic-client/``). Elsewhere: ``~/.statamic-client/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/statamic-client/`` (default
    ``~/.local/share/statamic-client/``). Elsewhere: ``~/.statamic-client/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_profiles_dir() -> Path:
    """Return ``<config_dir>/profiles/``, creating it if necessary."""
    path = get_config_dir() / "profiles"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Return all stored profile names, sorted alphabetically."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def load_profile(name: str) -> Profile:
    """Load and validate a stored profile.

    Raises:
        ConfigError: If the profile does not exist, is not valid JSON, or
            fails validation.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    data = _read_json(path, f"profile '{name}'")
    try:
        return Profile.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    """Persist a profile atomically; the file name is derived from ``profile.name``."""
    data = profile.model_dump(mode="json")
    _atomic_write(_profile_path(profile.name), json.dumps(data, indent=2) + "\n")


def delete_profile(name: str) -> None:
    """Delete a stored profile.

    Raises:
        ConfigError: If the profile does not exist.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./statamic.json`` if present.

    The file may pin ``default_profile`` and/or ``api_url`` and
    ``default_site`` for a checkout.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_profile: Optional[str] = None,
    cli_api_url: Optional[str] = None,
    cli_site: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_profile``, ``cli_api_url``, ``cli_site``)
        2. Environment variables (``STATAMIC_PROFILE``,
           ``STATAMIC_API_URL``, ``STATAMIC_SITE``)
        3. Project config (``./statamic.json``)
        4. User config (``default_profile`` in the global config)

    Flag and environment values for the API URL and site override the
    selected profile. When no stored profile is selected, an unsaved
    profile named ``default`` is built from the flags, the environment or
    the project file's ``api_url``/``default_site``.

    Returns:
        A tuple of ``(global_config, active_profile_or_None)``.
    """
    global_cfg = load_global_config()
    project = load_project_config() or {}

    profile_name: Optional[str] = global_cfg.default_profile
    if project.get("default_profile"):
        profile_name = project["default_profile"]
    env_profile = os.environ.get(ENV_PROFILE)
    if env_profile:
        profile_name = env_profile
    if cli_profile is not None:
        profile_name = cli_profile

    profile: Optional[Profile] = None
    if profile_name is not None:
        profile = load_profile(profile_name)

    api_url = cli_api_url or os.environ.get(ENV_API_URL)
    site = cli_site or os.environ.get(ENV_SITE)

    if profile is None:
        api_url = api_url or project.get("api_url")
        site = site or project.get("default_site")
        if not api_url:
            return global_cfg, None
        return global_cfg, Profile(name=ADHOC_PROFILE_NAME, api_url=api_url, default_site=site)

    updates: dict[str, Any] = {}
    if api_url:
        updates["api_url"] = api_url
    if site:
        updates["default_site"] = site
    if updates:
        profile = profile.model_copy(update=updates)
    return global_cfg, profile
