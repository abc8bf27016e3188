from __future__ import annotations

"""Cache-through schema registry client.

Two instance-owned indices sit in front of the registry service:

* content key -> :class:`SchemaProperties`, filled by ``register_schema`` and
  ``get_schema_properties``;
* schema id -> :class:`Schema`, filled by every successful call.

Both indices are write-once per key and live as long as the client. The
registry may return a normalized rewrite of submitted content from
``get_schema``; the client does not normalize content itself, so resubmitting
the rewritten text is a cache miss that costs one extra registry call.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from schemacache.foundation.config import RegistryClientConfig, apply_env_overrides

from . import metrics as schema_metrics
from .caches import WriteOnceIndex
from .content_key import compute_content_key
from .http_service import HttpRegistryService
from .models import Schema, SchemaDescription, SchemaProperties, SerializationFormat
from .service import InMemoryRegistryService, RegistryService
from .validation import validate_description, validate_schema_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LookupFn = Callable[[str, str, SerializationFormat, str], Awaitable[SchemaProperties]]


class SchemaRegistryClient:
    """Resolve schemas to ids and ids to schemas with per-instance caching."""

    def __init__(self, service: RegistryService, *, owns_service: bool = False) -> None:
        self._service = service
        self._owns_service = owns_service
        self._ids_by_content: WriteOnceIndex[str, SchemaProperties] = WriteOnceIndex("content")
        self._schemas_by_id: WriteOnceIndex[str, Schema] = WriteOnceIndex("id")

    @classmethod
    def from_config(cls, config: RegistryClientConfig | None = None) -> "SchemaRegistryClient":
        """Factory: HTTP collaborator if an endpoint is configured, else in-memory."""

        cfg = apply_env_overrides(config or RegistryClientConfig())
        service: RegistryService
        if cfg.endpoint:
            service = HttpRegistryService(
                cfg.endpoint,
                api_version=cfg.api_version,
                timeout=cfg.timeout,
                auth_token=cfg.auth_token,
            )
        else:
            logger.info("No schema registry endpoint configured; using in-memory registry")
            service = InMemoryRegistryService()
        return cls(service, owns_service=True)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> Optional[str]:
        return getattr(self._service, "endpoint", None)

    async def register_schema(self, description: SchemaDescription) -> SchemaProperties:
        """Register ``description`` or resolve it to its existing id.

        The registry decides whether the content is new; repeated calls with
        the same coordinates and content are answered from the cache.
        """

        return await self._resolve(description, "register", self._service.register)

    register_or_fetch_id = register_schema

    async def get_schema_properties(self, description: SchemaDescription) -> SchemaProperties:
        """Look up the id of already-registered content without registering it."""

        return await self._resolve(description, "get_id", self._service.get_id)

    async def get_schema(self, schema_id: str) -> Schema:
        """Return the schema registered under ``schema_id``."""

        sid = validate_schema_id(schema_id)
        cached = self._schemas_by_id.get(sid)
        schema_metrics.record_cache_lookup("id", cached is not None)
        if cached is not None:
            logger.debug("Schema id %s served from cache", sid)
            return cached
        schema = await self._call("get_by_id", self._service.get_by_id, sid)
        return self._schemas_by_id.put_if_absent(sid, schema)

    fetch_content_by_id = get_schema

    def cache_info(self) -> Dict[str, int]:
        return {
            "content": len(self._ids_by_content),
            "id": len(self._schemas_by_id),
        }

    async def close(self) -> None:
        if not self._owns_service:
            return
        closer = getattr(self._service, "close", None)
        if closer is not None:
            await closer()

    async def __aenter__(self) -> "SchemaRegistryClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _resolve(
        self,
        description: SchemaDescription,
        operation: str,
        remote: _LookupFn,
    ) -> SchemaProperties:
        desc = validate_description(description)
        key = compute_content_key(desc)
        cached = self._ids_by_content.get(key)
        schema_metrics.record_cache_lookup("content", cached is not None)
        if cached is not None:
            logger.debug("Schema %s/%s served from cache as %s", desc.group_name, desc.name, cached.id)
            return cached

        properties = await self._call(
            operation,
            remote,
            desc.group_name,
            desc.name,
            desc.serialization_format,
            desc.content,
        )
        stored = self._ids_by_content.put_if_absent(key, properties)
        # The id was minted or confirmed for exactly this content.
        self._schemas_by_id.put_if_absent(
            properties.id, Schema(content=desc.content, properties=properties)
        )
        return stored

    async def _call(self, operation: str, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        logger.debug("Schema registry %s request", operation)
        try:
            result = await func(*args)
        except Exception as exc:
            schema_metrics.record_request(operation, ok=False)
            logger.warning("Schema registry %s failed: %s", operation, exc)
            raise
        schema_metrics.record_request(operation, ok=True)
        return result


__all__ = ["SchemaRegistryClient"]
