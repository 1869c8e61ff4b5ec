"""
Harness configuration and transaction test data.

Values are loaded explicitly and passed to flows; nothing here is read at
import time.

    config = load_config()                      # $BANKCHECK_CONFIG or ./config.json
    data = load_test_data("test-data/Transfer_TestData.json")
    transfer = get_transfer_data(data, "transferTransaction")
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .constants import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH, DEFAULT_TEST_DATA_PATH
from .exceptions import ConfigError
from .models import HarnessConfig, TransactionData

logger = logging.getLogger(__name__)

# env var -> HarnessConfig field
ENV_OVERRIDES = {
    "BANKCHECK_URL": "url",
    "BANKCHECK_USERNAME": "username",
    "BANKCHECK_PASSWORD": "password",
}


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error loading %s: %s", path, e)
        raise ConfigError.from_load_failure(str(path), e) from e


def load_config(
    path: str | Path | None = None,
    *,
    env: dict[str, str] | None = None,
) -> HarnessConfig:
    """
    Load config.json into a HarnessConfig.

    Args:
        path: Config file path. Defaults to $BANKCHECK_CONFIG, then ./config.json
        env: Environment mapping used for overrides (defaults to os.environ)

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation
    """
    environ = os.environ if env is None else env
    resolved = Path(path or environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
    raw = _read_json(resolved)
    if not isinstance(raw, dict):
        raise ConfigError.from_load_failure(str(resolved), TypeError("expected a JSON object"))

    for var, field in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            raw[field] = value

    try:
        return HarnessConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError.from_load_failure(str(resolved), e) from e


def load_test_data(path: str | Path = DEFAULT_TEST_DATA_PATH) -> dict[str, dict[str, Any]]:
    """Load named transaction data sets (e.g. transferTransaction, largeTransfer)."""
    resolved = Path(path)
    raw = _read_json(resolved)
    if not isinstance(raw, dict):
        raise ConfigError.from_load_failure(str(resolved), TypeError("expected a JSON object"))
    return raw


def get_transfer_data(data: dict[str, dict[str, Any]], name: str) -> TransactionData:
    if name not in data:
        raise ConfigError.missing_data_set(name, "test data")
    try:
        return TransactionData.model_validate(data[name])
    except ValidationError as e:
        raise ConfigError(f"Transaction data set '{name}' is invalid: {e}") from e


def get_transfer_field(data: dict[str, dict[str, Any]], name: str, field: str) -> Any:
    if name not in data:
        raise ConfigError.missing_data_set(name, "test data")
    value = data[name].get(field)
    if value is None or value == "":
        raise ConfigError.missing_field(field, name)
    return value
