# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from json import dumps
from logging import getLogger
from types import TracebackType
from typing import Any, Self

# 3p
from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

# project
from tasks.common import ProvisioningError, get_resource_url

log = getLogger(__name__)


class RequestSerializationError(ProvisioningError):
    pass


class RequestConstructionError(ProvisioningError):
    pass


class TransportError(ProvisioningError):
    pass


class ArmResponseError(ProvisioningError):
    def __init__(self, resource_id: str, status: int, reason: str | None, body: str) -> None:
        self.resource_id = resource_id
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"Request for {resource_id} failed: {status} ({reason})\nResponse body: {body}")


class ArmClient:
    """Minimal Azure Resource Manager REST client authenticated with a bearer token"""

    def __init__(self, token: str, timeout: float):
        self.token = token
        self.timeout = timeout
        self.session: ClientSession | None = None

    def _get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}", "Content-Type": "application/json"}

    async def create_or_replace_resource(self, resource_id: str, api_version: str, body: dict[str, Any]) -> int:
        """PUT `body` to the resource endpoint, raising a ProvisioningError unless ARM answers with a 2xx"""
        try:
            payload = dumps(body, indent=2)
        except (TypeError, ValueError) as e:
            raise RequestSerializationError(f"Error serializing request for {resource_id}: {e}") from e

        url = get_resource_url(resource_id, api_version)
        log.debug("PUT %s\n%s", url, payload)
        try:
            async with self.session.put(url, data=payload, headers=self._get_headers()) as response:  # type: ignore
                if response.status >= 300:
                    content = await response.text()
                    raise ArmResponseError(resource_id, response.status, response.reason, content)
                return response.status
        except InvalidURL as e:
            raise RequestConstructionError(f"Error creating request for {resource_id}: {e}") from e
        except (ClientError, TimeoutError) as e:
            raise TransportError(f"Error executing request for {resource_id}: {e!r}") from e

    async def __aenter__(self) -> Self:
        self.session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        await self.session.__aenter__()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: TracebackType | None
    ) -> None:
        await self.session.__aexit__(exc_type, exc_value, traceback)  # type: ignore
