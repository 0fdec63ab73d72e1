# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from logging import getLogger
from typing import Any, Final, Literal, TypeAlias, cast

# project
from config.deployment_config import DeploymentConfig
from tasks.client.arm_client import ArmClient
from tasks.common import ACTION_GROUP_API_VERSION, ENABLED_STATUS, ProvisioningError, get_action_group_id

log = getLogger(__name__)

NotificationType: TypeAlias = Literal["email", "sms"]

EMAIL: Final = "email"
SMS: Final = "sms"
NOTIFICATION_TYPES: Final = (EMAIL, SMS)

EMAIL_RECEIVER_NAME: Final = "emailReceiver"
SMS_RECEIVER_NAME: Final = "smsReceiver"
SMS_COUNTRY_CODE: Final = "31"
MAX_SHORT_NAME_LENGTH: Final = 12


class InvalidNotificationTypeError(ProvisioningError):
    def __init__(self, notification_type: str) -> None:
        self.notification_type = notification_type
        super().__init__(f"Invalid notification type '{notification_type}', choose 'email' or 'sms'")


def parse_notification_type(raw: str) -> NotificationType:
    notification_type = raw.strip().lower()
    if notification_type not in NOTIFICATION_TYPES:
        raise InvalidNotificationTypeError(raw)
    return cast(NotificationType, notification_type)


def get_receivers(notification_type: str, target: str) -> dict[str, list[dict[str, str]]]:
    match parse_notification_type(notification_type):
        case "email":
            return {
                "emailReceivers": [
                    {"name": EMAIL_RECEIVER_NAME, "emailAddress": target, "status": ENABLED_STATUS},
                ]
            }
        case "sms":
            return {
                "smsReceivers": [
                    {
                        "name": SMS_RECEIVER_NAME,
                        "countryCode": SMS_COUNTRY_CODE,
                        "phoneNumber": target,
                        "status": ENABLED_STATUS,
                    },
                ]
            }


def build_action_group_body(config: DeploymentConfig, notification_type: str, target: str) -> dict[str, Any]:
    return {
        "location": config.action_group_location,
        "properties": {
            "groupShortName": config.action_group_name[:MAX_SHORT_NAME_LENGTH],
            "enabled": True,
            **get_receivers(notification_type, target),
        },
    }


async def create_action_group(client: ArmClient, config: DeploymentConfig, notification_type: str, target: str) -> str:
    """Create the action group and return its resource ID, which is derived from the config alone"""
    action_group_id = get_action_group_id(config.subscription_id, config.resource_group, config.action_group_name)
    body = build_action_group_body(config, notification_type, target)
    status = await client.create_or_replace_resource(action_group_id, ACTION_GROUP_API_VERSION, body)
    log.info("Action group %s created (status %s)", config.action_group_name, status)
    return action_group_id
