"""
Configuration for the srt web translator package.
"""
from typing import Any, Callable, Dict, Optional, Union
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import os

from dotenv import load_dotenv

from .errors import ConfigurationError

DEPLOYMENTS = ("local", "remote")

# Service URLs keep the variable names used by existing .env files
URL_VARIABLES = {
    "local_serving_url": "LOCAL_SERVER_URL",
    "translated_local_url": "TRANSLATED_LOCAL_SERVER_URL",
    "remote_hosted_url": "GITHUB_PAGES_URL",
    "translated_remote_url": "TRANSLATED_GITHUB_PAGES_URL",
}

ENV_PREFIX = "SRT_TRANSLATE_"


@dataclass
class TranslatorConfig:
    """Settings for one translation run"""
    local_serving_url: str = ""
    translated_local_url: str = ""
    remote_hosted_url: str = ""
    translated_remote_url: str = ""
    deployment: str = "local"
    port: int = 3333
    dist_dir: Path = field(default_factory=lambda: Path("dist"))
    site_dir: Optional[Path] = None
    deploy_command: str = "npm run deploy"
    error_marker: str = "ERROR"
    poll_interval: float = 5.0
    max_wait: float = 900.0
    scroll_pause: float = 0.05
    server_startup_delay: float = 1.0
    wrap_threshold: int = 30
    headless: bool = True

    def __post_init__(self):
        self.dist_dir = Path(self.dist_dir)
        if self.site_dir is not None:
            self.site_dir = Path(self.site_dir)

        if self.deployment not in DEPLOYMENTS:
            raise ConfigurationError(
                f"Unknown deployment '{self.deployment}', expected one of {', '.join(DEPLOYMENTS)}"
            )
        if self.max_wait <= 0:
            raise ConfigurationError("max_wait must be positive")
        if self.poll_interval < 0:
            raise ConfigurationError("poll_interval must not be negative")

    @property
    def site_path(self) -> Path:
        """Directory the remote deploy command publishes from"""
        return self.site_dir if self.site_dir is not None else self.dist_dir

    def with_overrides(self, **overrides: Any) -> "TranslatorConfig":
        """Return a copy with the given non-None values replaced"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def get_user_config_dir() -> Path:
    """Get the per-user configuration directory

    Returns:
        Path to the configuration directory (not created)
    """
    if os.name == "nt":  # Windows
        return Path(os.environ.get("APPDATA", "")) / "SrtWebTranslator"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "srt-web-translator"


def find_env_file(env_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Locate the .env file to load

    An explicit path wins, then ./.env, then the per-user config directory.
    """
    if env_file is not None:
        env_file = Path(env_file)
        if not env_file.is_file():
            raise ConfigurationError(f"Environment file not found: {env_file}")
        return env_file

    for candidate in (Path.cwd() / ".env", get_user_config_dir() / ".env"):
        if candidate.is_file():
            return candidate
    return None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _converter(name: str) -> Callable[[str], Any]:
    default_type = {f.name: f.type for f in fields(TranslatorConfig)}[name]
    if default_type in (int, "int"):
        return int
    if default_type in (float, "float"):
        return float
    if default_type in (bool, "bool"):
        return _parse_bool
    if name in ("dist_dir", "site_dir"):
        return Path
    return str


def config_from_environ(environ: Optional[Dict[str, str]] = None) -> TranslatorConfig:
    """Build a configuration from environment variables

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Configuration with defaults for unset variables
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for name, variable in URL_VARIABLES.items():
        if environ.get(variable):
            values[name] = environ[variable]

    for f in fields(TranslatorConfig):
        variable = ENV_PREFIX + f.name.upper()
        raw = environ.get(variable)
        if raw is None or raw == "":
            continue
        try:
            values[f.name] = _converter(f.name)(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {variable}: {raw!r}") from e

    return TranslatorConfig(**values)


def load_config(env_file: Optional[Union[str, Path]] = None) -> TranslatorConfig:
    """Load the .env file (if any) and build the configuration

    Variables already present in the environment are not overridden.

    Args:
        env_file: Explicit .env path

    Returns:
        Loaded configuration
    """
    path = find_env_file(env_file)
    if path is not None:
        load_dotenv(path, override=False)
    return config_from_environ()
