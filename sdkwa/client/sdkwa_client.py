"""
HTTP transport for the SDKWA gateway API.

Key Design Decisions:
- Pure dependency injection of the aiohttp session (shared connection pool)
- Every call is self-contained: no automatic retry
- Non-2xx responses become ``SDKWAApiError``, network failures
  ``SDKWATransportError`` and unparseable bodies ``SDKWADecodeError``
"""

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp
from pydantic import BaseModel

from sdkwa.client.config import ClientConfig
from sdkwa.core.errors import (
    SDKWAApiError,
    SDKWAConfigError,
    SDKWADecodeError,
    SDKWATransportError,
)
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import MessengerType, RequestOptions, resolve_messenger_type

# (filename, content, content_type) tuple, raw bytes or a binary file-like object
FileInput = Any


class SDKWAUrlBuilder:
    """Builds URLs for SDKWA API endpoints."""

    def __init__(self, api_host: str, id_instance: str):
        self.api_host = api_host.rstrip("/")
        self.id_instance = id_instance

    def get_base_path(self, messenger_type: MessengerType) -> str:
        return f"/{messenger_type.value}/{self.id_instance}"

    def get_endpoint_url(self, endpoint: str, messenger_type: MessengerType) -> str:
        """Build URL for an instance endpoint.

        Args:
            endpoint: Endpoint path relative to the instance, e.g. ``sendMessage``
            messenger_type: Messenger selected for this call

        Returns:
            ``<host>/<messengerType>/<idInstance>/<endpoint>``
        """
        return (
            f"{self.api_host}{self.get_base_path(messenger_type)}/"
            f"{endpoint.lstrip('/')}"
        )

    def get_user_url(self, path: str) -> str:
        """Build URL for a user-level (instance management) endpoint."""
        return f"{self.api_host}/{path.lstrip('/')}"

    def get_websocket_url(self) -> str:
        """Build the streaming URL by swapping the HTTP scheme for ws/wss."""
        if self.api_host.startswith("https://"):
            host = "wss://" + self.api_host[len("https://") :]
        elif self.api_host.startswith("http://"):
            host = "ws://" + self.api_host[len("http://") :]
        else:
            host = self.api_host
        return f"{host}/ws/{self.id_instance}"


class SDKWAFormDataBuilder:
    """Builds form data for SDKWA multipart requests."""

    @staticmethod
    def build_form_data(
        fields: dict[str, Any] | None, files: dict[str, FileInput]
    ) -> aiohttp.FormData:
        """Build FormData for multipart/form-data requests.

        Args:
            fields: Text fields to include in the form; ``None`` values are skipped
            files: ``{field_name: (filename, content, content_type)}`` or raw
                bytes / file-like content, which is sent with filename ``file``

        Returns:
            aiohttp.FormData object ready for request

        Raises:
            ValueError: If file format is invalid
        """
        form = aiohttp.FormData()

        # Text fields first
        if fields:
            for key, value in fields.items():
                if value is None:
                    continue
                form.add_field(key, str(value))

        for field_name, file_info in files.items():
            if isinstance(file_info, tuple):
                if len(file_info) != 3:
                    raise ValueError(
                        f"Invalid file format for field '{field_name}'. "
                        f"Expected tuple (filename, content, content_type)"
                    )
                filename, content, content_type = file_info
            else:
                filename, content, content_type = (
                    "file",
                    file_info,
                    "application/octet-stream",
                )

            if hasattr(content, "read"):
                content = content.read()
            if not isinstance(content, (bytes, bytearray)):
                raise ValueError(
                    f"File content for field '{field_name}' must be bytes "
                    f"or a readable binary object"
                )

            form.add_field(
                field_name,
                bytes(content),
                filename=filename,
                content_type=content_type,
            )

        return form


class SDKWAClient:
    """
    SDKWA gateway API client.

    Owns no connections: the aiohttp session is injected and may be shared
    by several clients and concurrent tasks.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: ClientConfig,
        logger: Any | None = None,
    ):
        """Initialize the client with dependency injection.

        Args:
            session: Persistent aiohttp session
            config: Immutable session configuration
            logger: Pre-configured logger instance
        """
        self.session = session
        self.config = config
        self.logger = logger or get_logger(__name__).bind(
            id_instance=config.id_instance
        )

        self.url_builder = SDKWAUrlBuilder(config.api_host, config.id_instance)
        self.form_builder = SDKWAFormDataBuilder()
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)

        self.logger.debug(
            f"SDKWA client initialized for instance {config.id_instance}, "
            f"messenger: {config.messenger_type.value}"
        )

    @property
    def id_instance(self) -> str:
        return self.config.id_instance

    @property
    def messenger_type(self) -> MessengerType:
        return self.config.messenger_type

    def _get_headers(self, include_content_type: bool = True) -> dict[str, str]:
        """Get HTTP headers for instance-level requests."""
        headers = {"Authorization": f"Bearer {self.config.api_token_instance}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    def _get_user_headers(self) -> dict[str, str]:
        """Get HTTP headers for user-level requests.

        Raises:
            SDKWAConfigError: If user credentials are not configured
        """
        if not self.config.user_id or not self.config.user_token:
            raise SDKWAConfigError(
                "user_id and user_token are required for this operation"
            )
        return {
            "x-user-id": self.config.user_id,
            "x-user-token": self.config.user_token,
            "Content-Type": "application/json",
        }

    def build_url(self, endpoint: str, options: RequestOptions | None = None) -> str:
        messenger_type = resolve_messenger_type(self.config.messenger_type, options)
        return self.url_builder.get_endpoint_url(endpoint, messenger_type)

    @staticmethod
    def _serialize(body: Any) -> Any:
        if isinstance(body, BaseModel):
            return body.model_dump(by_alias=True, exclude_none=True, mode="json")
        return body

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> Any:
        """Send a JSON request to an instance endpoint.

        Args:
            method: HTTP method
            endpoint: Endpoint path relative to the instance
            body: JSON body (dict, list or pydantic model)
            options: Per-call overrides

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            SDKWAApiError: For non-2xx responses
            SDKWATransportError: For network failures and timeouts
            SDKWADecodeError: For non-JSON response bodies
        """
        url = self.build_url(endpoint, options)
        kwargs: dict[str, Any] = {"headers": self._get_headers()}
        if body is not None:
            kwargs["json"] = self._serialize(body)

        self.logger.debug(f"{method} {url}")
        return await self._send(method, url, **kwargs)

    async def multipart_request(
        self,
        method: str,
        endpoint: str,
        fields: dict[str, Any] | None = None,
        files: dict[str, FileInput] | None = None,
        options: RequestOptions | None = None,
    ) -> Any:
        """Send a multipart/form-data request to an instance endpoint.

        Args:
            method: HTTP method
            endpoint: Endpoint path relative to the instance
            fields: Text form fields
            files: Files to upload, see ``SDKWAFormDataBuilder``
            options: Per-call overrides

        Returns:
            Decoded JSON response, or None for an empty body
        """
        url = self.build_url(endpoint, options)
        # aiohttp sets the multipart Content-Type with its boundary
        headers = self._get_headers(include_content_type=False)
        data = self.form_builder.build_form_data(fields, files or {})

        self.logger.debug(
            f"{method} {url} (multipart, files: {list((files or {}).keys())})"
        )
        return await self._send(method, url, headers=headers, data=data)

    async def user_request(self, method: str, path: str, body: Any = None) -> Any:
        """Send a request authenticated with user credentials.

        Args:
            method: HTTP method
            path: Absolute API path, e.g. ``/api/v1/instance/user/instances/list``
            body: JSON body

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            SDKWAConfigError: If user credentials are not configured
        """
        headers = self._get_user_headers()
        url = self.url_builder.get_user_url(path)
        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["json"] = self._serialize(body)

        self.logger.debug(f"{method} {url} (user auth)")
        return await self._send(method, url, **kwargs)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self.session.request(
                method,
                url,
                timeout=self._timeout,
                ssl=self.config.verify_ssl,
                **kwargs,
            ) as response:
                raw = await response.read()
                status = response.status
        except asyncio.TimeoutError as e:
            self.logger.error(f"Timeout after {self.config.timeout}s: {method} {url}")
            raise SDKWATransportError(
                f"Request timed out: {method} {url}", method=method, url=url
            ) from e
        except aiohttp.ClientError as e:
            self.logger.error(f"Request failed: {method} {url}: {e}")
            raise SDKWATransportError(
                f"Failed to make request: {e}", method=method, url=url
            ) from e

        if not 200 <= status < 300:
            text = raw.decode("utf-8", errors="replace")
            error = SDKWAApiError.from_response(status, text)
            if error.is_authentication_error:
                self.logger.error(
                    f"Authentication failed for instance {self.id_instance} "
                    f"({status}): check the API token"
                )
            else:
                self.logger.error(f"HTTP error {status} for {method} {url}: {text}")
            raise error

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SDKWADecodeError(
                f"Response from {method} {url} is not valid UTF-8: {e}", body=raw
            ) from e

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except ValueError as e:
            raise SDKWADecodeError(
                f"Failed to decode response from {method} {url}: {e}", body=text
            ) from e


@asynccontextmanager
async def open_client(config: ClientConfig) -> AsyncIterator[SDKWAClient]:
    """Create a client together with its own aiohttp session.

    For callers that do not manage a shared session themselves; the session
    is closed on exit.

    Example:
        async with open_client(ClientConfig.from_settings()) as client:
            state = await SDKWA(client).account.get_state_instance()
    """
    async with aiohttp.ClientSession() as session:
        yield SDKWAClient(session, config)
