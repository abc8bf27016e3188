"""HTTP binding of the registry service operations."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from schemacache.foundation.config import DEFAULT_API_VERSION

from .errors import NotFoundError, SchemaRegistryError, ServiceError
from .models import Schema, SchemaProperties, SerializationFormat

logger = logging.getLogger(__name__)


class HttpRegistryService:
    """Registry collaborator speaking the ``$schemaGroups`` REST API.

    Endpoints::

        PUT  /$schemaGroups/{group}/schemas/{name}         register
        POST /$schemaGroups/{group}/schemas/{name}:get-id  lookup by content
        GET  /$schemaGroups/$schemas/{id}                  content by id

    Identity comes back in the ``Schema-Id`` and ``Schema-Version`` response
    headers. A 404 raises :class:`NotFoundError`; any other failure raises
    :class:`ServiceError`. Nothing is retried here.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 10.0,
        auth_token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_version = api_version
        self._client = client or httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            timeout=timeout,
            headers=self._build_headers(auth_token),
        )
        self._owns_client = client is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _build_headers(self, token: str | None) -> dict[str, str]:
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def register(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        resp = await self._request(
            "PUT",
            self._schema_path(group_name, name),
            content=content,
            serialization_format=serialization_format,
        )
        return self._properties_from_headers(resp, serialization_format)

    async def get_id(
        self,
        group_name: str,
        name: str,
        serialization_format: SerializationFormat,
        content: str,
    ) -> SchemaProperties:
        resp = await self._request(
            "POST",
            f"{self._schema_path(group_name, name)}:get-id",
            content=content,
            serialization_format=serialization_format,
        )
        return self._properties_from_headers(resp, serialization_format)

    async def get_by_id(self, schema_id: str) -> Schema:
        resp = await self._request(
            "GET", f"/$schemaGroups/$schemas/{quote(schema_id, safe='')}"
        )
        fmt = _format_from_content_type(resp.headers.get("content-type", ""))
        properties = self._properties_from_headers(resp, fmt, schema_id=schema_id)
        return Schema(content=resp.text, properties=properties)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _schema_path(self, group_name: str, name: str) -> str:
        return f"/$schemaGroups/{quote(group_name, safe='')}/schemas/{quote(name, safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        content: str | None = None,
        serialization_format: SerializationFormat | None = None,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if serialization_format is not None:
            headers["Content-Type"] = (
                f"application/json; serialization={serialization_format.wire_name}"
            )
        try:
            resp = await self._client.request(
                method,
                path,
                params={"api-version": self._api_version},
                content=content.encode("utf-8") if content is not None else None,
                headers=headers,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _error_from_response(exc.response) from exc
        except httpx.HTTPError as exc:
            raise ServiceError(f"schema registry unreachable: {exc}") from exc
        return resp

    def _properties_from_headers(
        self,
        resp: httpx.Response,
        serialization_format: SerializationFormat,
        *,
        schema_id: str | None = None,
    ) -> SchemaProperties:
        sid = resp.headers.get("Schema-Id") or schema_id
        if not sid:
            raise ServiceError(
                "schema registry response is missing the Schema-Id header",
                status_code=resp.status_code,
            )
        raw_version = resp.headers.get("Schema-Version")
        try:
            version = int(raw_version) if raw_version else None
        except ValueError as exc:
            raise ServiceError(
                f"schema registry returned a non-integer version {raw_version!r}",
                status_code=resp.status_code,
            ) from exc
        return SchemaProperties(
            id=sid, serialization_format=serialization_format, version=version
        )


def _format_from_content_type(content_type: str) -> SerializationFormat:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.strip().lower() != "serialization":
            continue
        fmt = SerializationFormat.lookup(value.strip().strip('"'))
        if fmt is not None:
            return fmt
        raise ServiceError(f"schema registry returned unsupported serialization {value!r}")
    raise ServiceError(
        f"schema registry response has no serialization in content type {content_type!r}"
    )


def _error_from_response(resp: httpx.Response) -> SchemaRegistryError:
    detail = _error_detail(resp)
    message = f"schema registry error: {resp.status_code}"
    if detail:
        message = f"{message} ({detail})"
    logger.debug("Registry request %s %s failed: %s", resp.request.method, resp.request.url, message)
    if resp.status_code == 404:
        return NotFoundError(message, status_code=404)
    return ServiceError(message, status_code=resp.status_code)


def _error_detail(resp: httpx.Response) -> str | None:
    try:
        body: Any = resp.json()
    except ValueError:
        return resp.text.strip() or None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message") or error.get("code")
        return body.get("message") or body.get("detail")
    return None


__all__ = ["HttpRegistryService"]
