"""
Instance management handler.

User-level operations authenticated with ``x-user-id``/``x-user-token``
instead of the instance bearer token.
"""

from typing import Any

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.messaging.models.base import parse_object
from sdkwa.messaging.models.instance_models import (
    CreateInstanceRequest,
    ExtendInstanceRequest,
)

USER_API_PREFIX = "/api/v1/instance/user"


class InstanceHandler:
    """Handler for the user's instances."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def get_instances(self) -> dict[str, Any]:
        data = await self.client.user_request(
            "POST", f"{USER_API_PREFIX}/instances/list"
        )
        return parse_object(data)

    async def create_instance(self, request: CreateInstanceRequest) -> dict[str, Any]:
        """Create an instance for the given tariff and period."""
        data = await self.client.user_request(
            "POST", f"{USER_API_PREFIX}/instance/createByOrder", body=request
        )
        self.logger.info(f"Instance ordered: {request.tariff}/{request.period}")
        return parse_object(data)

    async def extend_instance(self, request: ExtendInstanceRequest) -> dict[str, Any]:
        data = await self.client.user_request(
            "POST", f"{USER_API_PREFIX}/instance/extendByOrder", body=request
        )
        return parse_object(data)

    async def delete_instance(self, id_instance: int) -> dict[str, Any]:
        data = await self.client.user_request(
            "POST",
            f"{USER_API_PREFIX}/instance/delete",
            body={"idInstance": id_instance},
        )
        self.logger.info(f"Instance {id_instance} deleted")
        return parse_object(data)

    async def restore_instance(self, id_instance: int) -> dict[str, Any]:
        data = await self.client.user_request(
            "POST",
            f"{USER_API_PREFIX}/instance/restore",
            body={"idInstance": id_instance},
        )
        return parse_object(data)
