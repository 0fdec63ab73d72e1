# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from collections.abc import Callable
from logging import getLogger
from os import environ
from typing import TypeVar

T = TypeVar("T")

log = getLogger(__name__)


# Settings
LOG_LEVEL_SETTING = "LOG_LEVEL"
ARM_REQUEST_TIMEOUT_SETTING = "ARM_REQUEST_TIMEOUT"
DEPLOYMENT_CONFIG_PATH_SETTING = "DEPLOYMENT_CONFIG_PATH"

# Defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ARM_REQUEST_TIMEOUT = 30.0  # seconds
DEFAULT_DEPLOYMENT_CONFIG_PATH = "config.json"

LOG_LEVELS = {"ERROR", "WARN", "WARNING", "INFO", "DEBUG"}


def parse_config_option(name: str, parse: Callable[[str], T | None], default: T) -> T:
    """Get a configuration option from the environment, parse it, or return a default"""
    try:
        value = environ.get(name)
        if value is None:
            return default
        result = parse(value)
        if result is None:
            log.error(f"Invalid value for configuration option {name}: {value}")
            return default
        return result
    except ValueError:
        log.error(f"Invalid value for configuration option {name}: {environ.get(name)}")
        return default


def positive_float(value: str) -> float | None:
    parsed = float(value)
    return parsed if parsed > 0 else None


def get_log_level() -> str:
    level = environ.get(LOG_LEVEL_SETTING, DEFAULT_LOG_LEVEL).upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def get_request_timeout() -> float:
    return parse_config_option(ARM_REQUEST_TIMEOUT_SETTING, positive_float, DEFAULT_ARM_REQUEST_TIMEOUT)


def get_deployment_config_path() -> str:
    return environ.get(DEPLOYMENT_CONFIG_PATH_SETTING) or DEFAULT_DEPLOYMENT_CONFIG_PATH
