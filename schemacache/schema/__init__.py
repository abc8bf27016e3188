from .client import SchemaRegistryClient
from .content_key import compute_content_key
from .errors import NotFoundError, SchemaRegistryError, ServiceError, ValidationError
from .http_service import HttpRegistryService
from .models import Schema, SchemaDescription, SchemaProperties, SerializationFormat
from .service import InMemoryRegistryService, RegistryService
from .validation import parse_serialization_format, validate_description, validate_schema_id

__all__ = [
    "SchemaRegistryClient",
    "HttpRegistryService",
    "InMemoryRegistryService",
    "RegistryService",
    "Schema",
    "SchemaDescription",
    "SchemaProperties",
    "SerializationFormat",
    "SchemaRegistryError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
    "compute_content_key",
    "parse_serialization_format",
    "validate_description",
    "validate_schema_id",
]
