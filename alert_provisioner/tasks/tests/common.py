# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from typing import Any
from unittest import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, MagicMock, patch

# project
from config.deployment_config import DeploymentConfig

SUB_ID1 = "decc348e-ca9e-4925-b351-ae56b0d9f811"
RESOURCE_GROUP_NAME = "test_rg"
ACTION_GROUP_NAME = "test-action-group"
ALERT_RULE_NAME = "test-alert-rule"
WORKSPACE_NAME = "test-workspace"
WEST_EUROPE = "westeurope"

TEST_CONFIG = DeploymentConfig(
    subscription_id=SUB_ID1,
    resource_group=RESOURCE_GROUP_NAME,
    action_group_location="global",
    alert_rule_location=WEST_EUROPE,
    workspace_name=WORKSPACE_NAME,
    action_group_name=ACTION_GROUP_NAME,
    alert_rule_name=ALERT_RULE_NAME,
)

ACTION_GROUP_ID = (
    f"/subscriptions/{SUB_ID1}/resourceGroups/{RESOURCE_GROUP_NAME}"
    f"/providers/microsoft.insights/actionGroups/{ACTION_GROUP_NAME}"
)


class AsyncTestCase(IsolatedAsyncioTestCase):
    def patch_path(self, path: str, **kwargs: Any) -> MagicMock | AsyncMock:
        p = patch(path, **kwargs)
        self.addCleanup(p.stop)
        return p.start()


def AsyncMockClient(**kwargs: Any) -> AsyncMock:
    """An AsyncMock with the context manager methods set up to use as a client"""
    m = AsyncMock(**kwargs)
    m.__aenter__.return_value = m
    m.__aexit__.return_value = None
    return m
