"""YAML configuration loading.

Used by [Pool.from_yaml()][interlang.core.pool.Pool.from_yaml],
[Store.from_yaml()][interlang.core.store.Store.from_yaml] and
[BaseWorkflow.from_yaml()][interlang.core.base_workflow.BaseWorkflow.from_yaml].

Examples:
    ```python
    from interlang.core.yaml import load_yaml

    config = load_yaml("config/interlang.yaml")
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file with ``yaml.safe_load``.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed configuration as a dictionary; ``{}`` for an empty file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not valid YAML or its top level
            is not a mapping.

    Warning:
        The structure of the result is not validated here. Callers pass it
        to a Pydantic model such as [PoolConfig][interlang.core.pool.PoolConfig].
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
