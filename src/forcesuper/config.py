"""Configuration for forcesuper."""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .errors import ConfigError

SCHEMA_VERSION = 1

CONFIG_FILE = ".forcesuper.json"

# Annotation that makes every override of a method call super
DEFAULT_REQUIRED_TAG = "ForceSuperCall"
# Annotation that makes a class a resolution root regardless of its extends clause
IGNORE_ANCESTOR_TAG = "ForceSuperIgnoreParent"

DEFAULT_EXCLUDE = ("build", "target", "out", "node_modules")

ENV_REQUIRED_TAG = "FORCESUPER_REQUIRED_TAG"
ENV_DEBUG = "FORCESUPER_DEBUG"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class CheckerConfig:
    """Settings for one checker run."""

    required_tag: str = DEFAULT_REQUIRED_TAG
    debug: bool = False
    exclude: tuple[str, ...] = field(default_factory=lambda: DEFAULT_EXCLUDE)

    def to_dict(self) -> dict:
        return {
            "schema_version": SCHEMA_VERSION,
            "required_tag": self.required_tag,
            "debug": self.debug,
            "exclude": list(self.exclude),
        }

    @classmethod
    def from_dict(cls, data: dict, source: str = CONFIG_FILE) -> "CheckerConfig":
        version = data.get("schema_version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise ConfigError(
                source,
                f"unsupported schema version {version} (supported: {SCHEMA_VERSION})",
            )

        required_tag = data.get("required_tag", DEFAULT_REQUIRED_TAG)
        if not isinstance(required_tag, str) or not required_tag.strip():
            raise ConfigError(source, "'required_tag' must be a non-empty string")

        debug = data.get("debug", False)
        if not isinstance(debug, bool):
            raise ConfigError(source, "'debug' must be a boolean")

        exclude = data.get("exclude", list(DEFAULT_EXCLUDE))
        if not isinstance(exclude, list) or not all(isinstance(e, str) for e in exclude):
            raise ConfigError(source, "'exclude' must be a list of strings")

        return cls(
            required_tag=required_tag.strip().lstrip("@"),
            debug=debug,
            exclude=tuple(exclude),
        )


def load_config(root: Path, environ: dict[str, str] | None = None) -> CheckerConfig:
    """
    Load configuration for a project root.

    Reads the optional .forcesuper.json file, then applies environment
    overrides (FORCESUPER_REQUIRED_TAG, FORCESUPER_DEBUG).

    Raises:
        ConfigError: If the file is not valid JSON or has invalid values.
    """
    environ = os.environ if environ is None else environ
    config_path = Path(root) / CONFIG_FILE

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(str(config_path), f"invalid JSON ({e.msg})") from e
        if not isinstance(data, dict):
            raise ConfigError(str(config_path), "top-level value must be an object")
        config = CheckerConfig.from_dict(data, source=str(config_path))
    else:
        config = CheckerConfig()

    tag = environ.get(ENV_REQUIRED_TAG)
    if tag:
        config = replace(config, required_tag=tag.strip().lstrip("@"))

    debug = environ.get(ENV_DEBUG)
    if debug is not None:
        config = replace(config, debug=debug.strip().lower() in _TRUE_VALUES)

    return config
