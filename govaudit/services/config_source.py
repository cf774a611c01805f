"""Read the governance YAML file into a plain mapping."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from govaudit.services.errors import ConfigNotFoundError, MalformedConfigError


def load_config_file(path: Path | str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigNotFoundError(config_path.name)
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise MalformedConfigError(f"{config_path.name} is not valid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise MalformedConfigError(f"{config_path.name} root must be a mapping")
    return raw
