"""YAML config loader — parses and validates a RunConfig."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from eval_express.config.domain.config import RunConfig
from eval_express.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
)


class YamlConfigLoader:
    """Loads, validates, and returns a RunConfig from a YAML file."""

    def load(self, path: Path) -> RunConfig:
        """
        Load and validate a RunConfig from a YAML file.

        Relative ``output`` paths are resolved against the config file's
        directory. An empty file yields the defaults.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            ConfigValidationError: if the top level is not a mapping or the
                schema is violated.
        """
        raw = _parse_yaml(path=path)
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigValidationError("top level must be a mapping")
        cfg = _build_config(raw=raw)
        if cfg.output is not None and not cfg.output.is_absolute():
            cfg = cfg.model_copy(update={"output": path.parent / cfg.output})
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc


def _build_config(raw: dict[str, Any]) -> RunConfig:
    try:
        return RunConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
