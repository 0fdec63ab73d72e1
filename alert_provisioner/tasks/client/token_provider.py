# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from json import JSONDecodeError, loads
from logging import getLogger
from subprocess import CalledProcessError, run
from typing import Protocol

# 3p
from azure.core.exceptions import ClientAuthenticationError
from azure.identity.aio import DefaultAzureCredential

# project
from tasks.common import ProvisioningError

log = getLogger(__name__)


class TokenError(ProvisioningError):
    pass


class TokenProvider(Protocol):
    async def get_token(self, resource: str) -> str: ...


class AzureCliTokenProvider:
    """Fetches a bearer token from an already logged in Azure CLI"""

    def __init__(self, executable: str = "az") -> None:
        self.executable = executable

    def command(self, resource: str) -> list[str]:
        return [self.executable, "account", "get-access-token", "--resource", resource, "--output", "json"]

    async def get_token(self, resource: str) -> str:
        cmd = self.command(resource)
        try:
            result = run(cmd, check=True, text=True, capture_output=True)
        except FileNotFoundError as e:
            raise TokenError(f"Azure CLI executable '{self.executable}' not found, is it installed?") from e
        except CalledProcessError as e:
            log.debug("'%s' failed:\n%s", " ".join(cmd), e.stderr)
            raise TokenError(f"Error getting token from Azure CLI (exit code {e.returncode}): {e.stderr}") from e

        try:
            output = loads(result.stdout)
        except JSONDecodeError as e:
            raise TokenError(f"Error parsing Azure CLI token response: {e}") from e

        token = output.get("accessToken") if isinstance(output, dict) else None
        if not isinstance(token, str):
            raise TokenError("Token not found in Azure CLI response")
        return token


class CredentialTokenProvider:
    """Fetches a bearer token through the azure-identity credential chain"""

    async def get_token(self, resource: str) -> str:
        try:
            async with DefaultAzureCredential() as cred:
                access_token = await cred.get_token(resource + ".default")
        except ClientAuthenticationError as e:
            raise TokenError(f"Error getting token from Azure credential chain: {e.message}") from e
        return access_token.token
