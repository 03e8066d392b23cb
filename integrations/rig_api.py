"""Async client for the rig backend.

The backend owns the example catalog, looks up extension manifests and
creates project folders on disk. ``RigApiClient`` implements all three
workflow services.
"""

import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from schemas.project import CodeGenerationOption, Example, ExtensionManifest
from workflow.config import RigApiConfig

logger = logging.getLogger(__name__)


class RigApiError(Exception):
    """Raised when a rig backend request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RigApiClient:
    """Client for the rig backend.

    Usage:
        async with RigApiClient.from_config(config.api) as client:
            examples = await client.fetch_examples()
    """

    def __init__(
        self,
        base_url: str = RigApiConfig.base_url,
        timeout: float = RigApiConfig.timeout,
        transport: httpx.AsyncBaseTransport | None = None,
        examples_path: str = RigApiConfig.examples_path,
        project_path: str = RigApiConfig.project_path,
        manifest_path: str = RigApiConfig.manifest_path,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
            examples_path: Endpoint listing examples
            project_path: Endpoint creating projects
            manifest_path: Endpoint returning extension manifests
        """
        self.base_url = base_url.rstrip("/")
        self.examples_path = examples_path
        self.project_path = project_path
        self.manifest_path = manifest_path
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, config: RigApiConfig) -> "RigApiClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            examples_path=config.examples_path,
            project_path=config.project_path,
            manifest_path=config.manifest_path,
        )

    async def __aenter__(self) -> "RigApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty)."""
        url = urljoin(self.base_url + "/", endpoint.lstrip("/"))
        logger.debug(f"{method} {url}")

        try:
            response = await self._client.request(method, url, json=json_data)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RigApiError(_error_message(e.response), e.response.status_code) from e
        except httpx.RequestError as e:
            raise RigApiError(f"Connection error: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RigApiError(f"Invalid response from {endpoint}") from e

    async def fetch_examples(self) -> list[Example]:
        """List the examples new projects can start from."""
        data = await self._request("GET", self.examples_path)
        if isinstance(data, dict):
            data = data.get("examples", [])
        return [Example.model_validate(item) for item in data or []]

    async def fetch_user_extension_manifest(
        self,
        user_id: str,
        secret: str,
        client_id: str,
        version: str,
    ) -> ExtensionManifest:
        """Fetch the manifest of one of the user's extensions."""
        data = await self._request(
            "POST",
            self.manifest_path,
            json_data={
                "userId": user_id,
                "secret": secret,
                "clientId": client_id,
                "version": version,
            },
        )
        if not isinstance(data, dict):
            raise RigApiError(f"No manifest found for extension {client_id} version {version}")
        return ExtensionManifest.model_validate(data)

    async def create_project(
        self,
        folder_path: str,
        code_generation_option: CodeGenerationOption,
        example_index: int,
    ) -> None:
        """Create the project folder and fill it according to the option."""
        await self._request(
            "POST",
            self.project_path,
            json_data={
                "projectFolderPath": folder_path,
                "codeGenerationOption": CodeGenerationOption(code_generation_option).value,
                "exampleIndex": example_index,
            },
        )
        logger.info(f"Created project in {folder_path or '(no folder)'}")


def _error_message(response: httpx.Response) -> str:
    """Prefer the message the backend sends over the bare status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    text = response.text.strip()
    if text and len(text) <= 200:
        return text
    return f"API error: {response.status_code}"
