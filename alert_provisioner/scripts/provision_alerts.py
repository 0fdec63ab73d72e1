#!/usr/bin/env python

# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# usage: provision_alerts.py [-h] [-c CONFIG] [-n NOTIFICATION_TYPE] [-t TARGET] [-q QUERY] [-d]
#                            [--use-default-credential]
#
# Create an Azure Monitor action group and a scheduled query alert rule that notifies it
#
# optional arguments:
#   -h, --help            show this help message and exit
#   -c CONFIG, --config CONFIG
#                         Path to the deployment config JSON file. Defaults to $DEPLOYMENT_CONFIG_PATH or config.json
#   -n NOTIFICATION_TYPE, --notification-type NOTIFICATION_TYPE
#                         Notification channel, 'email' or 'sms'. Prompted for if not provided
#   -t TARGET, --target TARGET
#                         Email address or phone number to notify. Prompted for if not provided
#   -q QUERY, --query QUERY
#                         Kusto query evaluated by the alert rule. Prompted for if not provided
#   -d, --dry-run         Print the requests that would be sent. No changes will be made to the Azure environment
#   --use-default-credential
#                         Authenticate with the azure-identity credential chain instead of the Azure CLI

# stdlib
import argparse
from asyncio import run
from json import dumps
from logging import WARNING, basicConfig, getLogger
from typing import Final

# project
from config.deployment_config import DeploymentConfig, DeploymentConfigError, load_deployment_config
from config.env import get_deployment_config_path, get_log_level, get_request_timeout
from tasks.action_group import NotificationType, build_action_group_body, create_action_group, parse_notification_type
from tasks.alert_rule import DEFAULT_ALERT_QUERY, build_alert_rule_body, create_alert_rule
from tasks.client.arm_client import ArmClient
from tasks.client.token_provider import AzureCliTokenProvider, CredentialTokenProvider, TokenProvider
from tasks.common import MANAGEMENT_RESOURCE, ProvisioningError, get_action_group_id

getLogger("azure").setLevel(WARNING)
log = getLogger("alert_provisioner")

# ===== Console ===== #
NOTIFICATION_TYPE_PROMPT: Final = "Notify by email or sms? "
TARGET_PROMPT: Final = "Enter the email address or phone number: "
QUERY_PROMPT: Final = "Enter the Kusto query for the alert rule (leave empty for the default): "

FETCHING_TOKEN: Final = "Fetching token..."
CREATING_ACTION_GROUP: Final = "Creating action group..."
CREATING_ALERT_RULE: Final = "Creating alert rule..."
ACTION_GROUP_CREATED: Final = "Action group created successfully."
ALERT_RULE_CREATED: Final = "Alert rule created successfully."
DONE_BANNER: Final = "Done! Your alert and notification are set up."
SEPARATOR: Final = "\n==============================\n"


def dry_run_of(s: str) -> str:
    msg = s[0].lower() + s[1:]
    return f"DRY RUN | Would be {msg}"


def prompt_for(prompt: str, provided: str | None) -> str:
    if provided is not None:
        return provided.strip()
    return input(prompt).strip()


def get_token_provider(use_default_credential: bool) -> TokenProvider:
    if use_default_credential:
        return CredentialTokenProvider()
    return AzureCliTokenProvider()


async def provision(
    config: DeploymentConfig,
    notification_type: NotificationType,
    target: str,
    query: str,
    token_provider: TokenProvider,
) -> str:
    """Create the action group, then the alert rule pointing at it. Returns the action group ID"""
    print(FETCHING_TOKEN)
    token = await token_provider.get_token(MANAGEMENT_RESOURCE)

    async with ArmClient(token, get_request_timeout()) as client:
        print(CREATING_ACTION_GROUP)
        action_group_id = await create_action_group(client, config, notification_type, target)
        print(ACTION_GROUP_CREATED)

        print(CREATING_ALERT_RULE)
        await create_alert_rule(client, config, action_group_id, query)
        print(ALERT_RULE_CREATED)

    return action_group_id


def dry_run(config: DeploymentConfig, notification_type: NotificationType, target: str, query: str) -> None:
    action_group_id = get_action_group_id(config.subscription_id, config.resource_group, config.action_group_name)
    action_group_body = build_action_group_body(config, notification_type, target)
    alert_rule_body = build_alert_rule_body(config, action_group_id, query)
    log.info(f"{SEPARATOR}{dry_run_of('Creating action group')} {action_group_id}:")
    log.info(dumps(action_group_body, indent=2))
    log.info(f"{SEPARATOR}{dry_run_of('Creating alert rule')} {config.alert_rule_name}:")
    log.info(dumps(alert_rule_body, indent=2))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an Azure Monitor action group and a scheduled query alert rule that notifies it"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="Path to the deployment config JSON file. Defaults to $DEPLOYMENT_CONFIG_PATH or config.json",
    )
    parser.add_argument(
        "-n",
        "--notification-type",
        type=str,
        help="Notification channel, 'email' or 'sms'. Prompted for if not provided",
    )
    parser.add_argument(
        "-t",
        "--target",
        type=str,
        help="Email address or phone number to notify. Prompted for if not provided",
    )
    parser.add_argument(
        "-q",
        "--query",
        type=str,
        help="Kusto query evaluated by the alert rule. Prompted for if not provided",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Print the requests that would be sent. No changes will be made to the Azure environment",
    )
    parser.add_argument(
        "--use-default-credential",
        action="store_true",
        help="Authenticate with the azure-identity credential chain instead of the Azure CLI",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    """
    Overview:
    1) Load the deployment config.
    2) Ask the operator for the notification channel, the target and the alert query.
    3) Fetch a bearer token for Azure Resource Manager.
    4) Create the action group, then the alert rule that references it.
    Any failure exits with status 1 and leaves already created resources as they are.
    """
    args = parse_args(argv)
    if args.dry_run:
        log.info("Dry run enabled, no changes will be made")

    try:
        config = load_deployment_config(args.config or get_deployment_config_path())
        notification_type = parse_notification_type(prompt_for(NOTIFICATION_TYPE_PROMPT, args.notification_type))
        target = prompt_for(TARGET_PROMPT, args.target)
        query = prompt_for(QUERY_PROMPT, args.query)
        if not query:
            log.info(f"No query provided, using the default query: {DEFAULT_ALERT_QUERY}")
            query = DEFAULT_ALERT_QUERY

        if args.dry_run:
            dry_run(config, notification_type, target, query)
            return

        await provision(config, notification_type, target, query, get_token_provider(args.use_default_credential))
    except (DeploymentConfigError, ProvisioningError) as e:
        log.error(str(e))
        raise SystemExit(1) from e

    print(DONE_BANNER)


def cli() -> None:
    basicConfig(level=get_log_level())
    try:
        run(main())
    except KeyboardInterrupt:
        log.error("Interrupted, exiting.")
        raise SystemExit(1) from None


if __name__ == "__main__":
    cli()
