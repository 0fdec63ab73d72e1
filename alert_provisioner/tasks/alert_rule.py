# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from logging import getLogger
from typing import Any, Final

# project
from config.deployment_config import DeploymentConfig
from tasks.client.arm_client import ArmClient
from tasks.common import ALERT_RULE_API_VERSION, get_alert_rule_id, get_workspace_id

log = getLogger(__name__)

ALERT_RULE_DESCRIPTION: Final = "Alert on custom log query"
ALERT_RULE_SEVERITY: Final = 3
EVALUATION_FREQUENCY: Final = "PT5M"
WINDOW_SIZE: Final = "PT5M"

DEFAULT_ALERT_QUERY: Final = "AzureActivity | where ActivityStatusValue == 'Failure'"


def build_alert_rule_body(config: DeploymentConfig, action_group_id: str, query: str) -> dict[str, Any]:
    return {
        "location": config.alert_rule_location,
        "properties": {
            "enabled": True,
            "description": ALERT_RULE_DESCRIPTION,
            "severity": ALERT_RULE_SEVERITY,
            "evaluationFrequency": EVALUATION_FREQUENCY,
            "windowSize": WINDOW_SIZE,
            "scopes": [get_workspace_id(config.subscription_id, config.resource_group, config.workspace_name)],
            "criteria": {
                "allOf": [
                    {
                        "query": query,
                        "timeAggregation": "Count",
                        "operator": "GreaterThan",
                        "threshold": 0,
                        "failingPeriods": {
                            "numberOfEvaluationPeriods": 1,
                            "minFailingPeriodsToAlert": 1,
                        },
                    }
                ]
            },
            "actions": {"actionGroups": [action_group_id]},
        },
    }


async def create_alert_rule(client: ArmClient, config: DeploymentConfig, action_group_id: str, query: str) -> None:
    alert_rule_id = get_alert_rule_id(config.subscription_id, config.resource_group, config.alert_rule_name)
    body = build_alert_rule_body(config, action_group_id, query)
    status = await client.create_or_replace_resource(alert_rule_id, ALERT_RULE_API_VERSION, body)
    log.info("Alert rule %s created (status %s)", config.alert_rule_name, status)
