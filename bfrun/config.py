"""
Run settings for the interpreter front end.

Settings are layered, later layers winning:
  1) RunConfig defaults
  2) BF_* environment variables (a .env file is loaded first)
  3) a YAML config file
  4) command-line flags
"""

import os
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv, find_dotenv

from brainfuck import DEFAULT_CELL_LIMIT

ENV_PREFIX = "BF_"
TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Invalid or unreadable run settings."""


def parse_cell_limit(value: Any) -> int:
    """Convert a flag, env or YAML value into a positive cell limit."""
    if isinstance(value, bool):
        raise ConfigError(f"Cell limit value non-parse-able: {value!r}")
    if isinstance(value, int):
        limit = value
    else:
        try:
            limit = int(str(value).strip())
        except ValueError:
            raise ConfigError(f"Cell limit value non-parse-able: {value!r}") from None
    if limit <= 0:
        raise ConfigError(f"Cell limit must be a positive integer, got {limit}")
    return limit


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ConfigError(f"Expected a boolean, got {value!r}")


def parse_positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if isinstance(value, bool) or number <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return number


@dataclass
class RunConfig:
    """Settings for a single interpreter run."""
    cell_limit: int = DEFAULT_CELL_LIMIT
    verbose: bool = False
    input_text: Optional[str] = None
    trace: bool = False
    trace_window: int = 8
    prompt: str = "> "

    def __post_init__(self):
        self.cell_limit = parse_cell_limit(self.cell_limit)
        self.verbose = parse_bool(self.verbose)
        self.trace = parse_bool(self.trace)
        self.trace_window = parse_positive_int(self.trace_window, "trace_window")
        if self.input_text is not None:
            self.input_text = str(self.input_text)
        self.prompt = str(self.prompt)

    def merged(self, **overrides: Any) -> 'RunConfig':
        """Return a copy with every override that is not None applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional['RunConfig'] = None) -> 'RunConfig':
        return (base or cls()).merged(**dict(data))


def settings_from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect BF_* variables that name a RunConfig field."""
    settings = {}
    for f in fields(RunConfig):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            settings[f.name] = environ[key]
    return settings


def settings_from_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Couldn't open config file: {path} ({e})") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping of settings")
    return data


def load_config(config_path: Optional[str] = None,
                dotenv_path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None,
                **overrides: Any) -> RunConfig:
    """Build a RunConfig from env, an optional YAML file, and explicit overrides.

    When `environ` is None the process environment is used, after loading
    `dotenv_path` (or the nearest .env from the working directory).
    """
    if environ is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        environ = os.environ

    config = RunConfig.from_mapping(settings_from_env(environ))
    if config_path:
        config = RunConfig.from_mapping(settings_from_yaml(config_path), base=config)
    return config.merged(**overrides)
