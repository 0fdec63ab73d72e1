# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/  Copyright 2025 Datadog, Inc.

# stdlib
from typing import Final

MANAGEMENT_URL: Final = "https://management.azure.com"
MANAGEMENT_RESOURCE: Final = MANAGEMENT_URL + "/"
"""Audience requested when fetching a bearer token for ARM"""

ACTION_GROUP_API_VERSION: Final = "2022-06-01"
ALERT_RULE_API_VERSION: Final = "2023-12-01"

ENABLED_STATUS: Final = "Enabled"


class ProvisioningError(Exception):
    """Base class for every failure that aborts provisioning"""


def get_resource_group_id(subscription_id: str, resource_group: str) -> str:
    return f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"


def get_action_group_id(subscription_id: str, resource_group: str, action_group_name: str) -> str:
    return (
        get_resource_group_id(subscription_id, resource_group)
        + "/providers/microsoft.insights/actionGroups/"
        + action_group_name
    )


def get_alert_rule_id(subscription_id: str, resource_group: str, alert_rule_name: str) -> str:
    return (
        get_resource_group_id(subscription_id, resource_group)
        + "/providers/microsoft.insights/scheduledQueryRules/"
        + alert_rule_name
    )


def get_workspace_id(subscription_id: str, resource_group: str, workspace_name: str) -> str:
    return (
        get_resource_group_id(subscription_id, resource_group)
        + "/providers/Microsoft.OperationalInsights/workspaces/"
        + workspace_name
    )


def get_resource_url(resource_id: str, api_version: str) -> str:
    return f"{MANAGEMENT_URL}{resource_id}?api-version={api_version}"
