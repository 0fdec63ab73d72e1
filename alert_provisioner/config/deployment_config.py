# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from json import JSONDecodeError, loads
from logging import getLogger
from typing import Any, NamedTuple

# 3p
from jsonschema import ValidationError, validate

log = getLogger(__name__)


class DeploymentConfig(NamedTuple):
    subscription_id: str
    resource_group: str
    action_group_location: str
    alert_rule_location: str
    workspace_name: str
    action_group_name: str
    alert_rule_name: str


FIELD_TO_KEY: dict[str, str] = {
    "subscription_id": "subscriptionID",
    "resource_group": "resourceGroup",
    "action_group_location": "actionGroupLocation",
    "alert_rule_location": "alertRuleLocation",
    "workspace_name": "workspaceName",
    "action_group_name": "actionGroupName",
    "alert_rule_name": "alertRuleName",
}

DEPLOYMENT_CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {key: {"type": "string", "minLength": 1} for key in FIELD_TO_KEY.values()},
    "required": list(FIELD_TO_KEY.values()),
    "additionalProperties": True,
}


class DeploymentConfigError(Exception):
    pass


def deserialize_deployment_config(config_str: str) -> DeploymentConfig | None:
    """Parse and validate a deployment config, returning None if it is not in the expected shape"""
    try:
        raw = loads(config_str)
        validate(instance=raw, schema=DEPLOYMENT_CONFIG_SCHEMA)
    except (JSONDecodeError, ValidationError) as e:
        log.debug("Invalid deployment config: %s", e)
        return None
    return DeploymentConfig(**{field: raw[key] for field, key in FIELD_TO_KEY.items()})


def load_deployment_config(path: str) -> DeploymentConfig:
    try:
        with open(path, encoding="utf-8") as f:
            config_str = f.read()
    except OSError as e:
        raise DeploymentConfigError(f"Error loading deployment config {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DeploymentConfigError(f"Error parsing deployment config {path}: {e}") from e

    if not (config := deserialize_deployment_config(config_str)):
        raise DeploymentConfigError(
            f"Error parsing deployment config {path}: expected a JSON object with string fields "
            + ", ".join(FIELD_TO_KEY.values())
        )
    return config
