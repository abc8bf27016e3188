# schemacache - cache-through client for a remote schema registry

__version__ = "0.1.0"

from schemacache.schema import (
    NotFoundError,
    Schema,
    SchemaDescription,
    SchemaProperties,
    SchemaRegistryClient,
    SchemaRegistryError,
    SerializationFormat,
    ServiceError,
    ValidationError,
)

__all__ = [
    "__version__",
    "NotFoundError",
    "Schema",
    "SchemaDescription",
    "SchemaProperties",
    "SchemaRegistryClient",
    "SchemaRegistryError",
    "SerializationFormat",
    "ServiceError",
    "ValidationError",
]
