from __future__ import annotations

"""
Settings for the Visitor Entry System.

Resolution order (later wins):
- built-in defaults (API at http://localhost:8083/api, no timeout)
- `visitor_entry.yaml` in the project root, or an explicit settings file
- environment variables `VISITOR_API_URL`, `VISITOR_API_TIMEOUT`, `VISITOR_DEBUG`
- explicit keyword overrides (CLI arguments)

Unknown keys in the settings file are rejected with a close-match hint, the
same strict policy applied to every other input.
"""

from dataclasses import dataclass, field, replace
import difflib
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

import yaml

from .errors import ConfigError
from .io_paths import LOGS_DIR, SETTINGS_FILE


DEFAULT_API_URL = "http://localhost:8083/api"

ENV_API_URL = "VISITOR_API_URL"
ENV_TIMEOUT = "VISITOR_API_TIMEOUT"
ENV_DEBUG = "VISITOR_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    # Seconds; None waits indefinitely
    timeout: Optional[float] = None
    log_dir: Path = field(default=LOGS_DIR)
    debug: bool = False

    @property
    def server_origin(self) -> str:
        """Scheme, host and port of `api_url` (e.g. `http://localhost:8083`)."""
        parts = urlsplit(self.api_url)
        return f"{parts.scheme}://{parts.netloc}"


def _coerce_url(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"api_url must be a non-empty string, got {value!r}")
    url = value.strip().rstrip("/")
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"api_url must be an absolute http(s) URL, got {value!r}")
    return url


def _coerce_timeout(value: object) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip().lower() in ("", "none"):
            return None
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeout must be a number of seconds, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {value!r}")
    return timeout


def _coerce_bool(value: object, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUTHY:
            return True
        if s in _FALSY:
            return False
    raise ConfigError(f"{field_name} must be a boolean, got {value!r}")


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """Read the YAML settings file. A missing file yields no overrides."""
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping at the top level")

    allowed = ("api_url", "timeout", "log_dir", "debug")
    for key in data:
        if key not in allowed:
            hint = difflib.get_close_matches(str(key), allowed, n=1)
            suffix = f" (did you mean '{hint[0]}'?)" if hint else ""
            raise ConfigError(f"Unknown setting '{key}' in {path}{suffix}")
    return data


def _apply(settings: Settings, values: Mapping[str, Any], base_dir: Path) -> Settings:
    changes: Dict[str, Any] = {}
    if "api_url" in values:
        changes["api_url"] = _coerce_url(values["api_url"])
    if "timeout" in values:
        changes["timeout"] = _coerce_timeout(values["timeout"])
    if "debug" in values:
        changes["debug"] = _coerce_bool(values["debug"], "debug")
    if values.get("log_dir") is not None:
        log_dir = Path(values["log_dir"])
        changes["log_dir"] = log_dir if log_dir.is_absolute() else base_dir / log_dir
    return replace(settings, **changes)


def load_settings(
    path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """Resolve settings from defaults, file, environment and explicit overrides.

    Keyword overrides whose value is None are ignored so CLI arguments that
    were not given do not mask lower layers.
    """
    settings_path = Path(path) if path is not None else SETTINGS_FILE
    environ = os.environ if env is None else env

    settings = Settings()
    settings = _apply(settings, _read_settings_file(settings_path), settings_path.parent)

    from_env: Dict[str, Any] = {}
    if environ.get(ENV_API_URL):
        from_env["api_url"] = environ[ENV_API_URL]
    if ENV_TIMEOUT in environ:
        from_env["timeout"] = environ[ENV_TIMEOUT]
    if ENV_DEBUG in environ:
        from_env["debug"] = environ[ENV_DEBUG]
    settings = _apply(settings, from_env, Path.cwd())

    explicit = {k: v for k, v in overrides.items() if v is not None}
    unknown = set(explicit) - {"api_url", "timeout", "log_dir", "debug"}
    if unknown:
        raise TypeError(f"Unexpected settings override(s): {', '.join(sorted(unknown))}")
    return _apply(settings, explicit, Path.cwd())
