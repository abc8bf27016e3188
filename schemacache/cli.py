from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List

from schemacache.foundation.config import (
    RegistryClientConfig,
    find_config_file,
    load_config,
)
from schemacache.schema import (
    NotFoundError,
    SchemaDescription,
    SchemaRegistryClient,
    SchemaRegistryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

EXIT_VALIDATION = 2
EXIT_NOT_FOUND = 3
EXIT_SERVICE = 4


def _add_description_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--group", required=True, help="Schema group name")
    parser.add_argument("--name", required=True, help="Schema name")
    parser.add_argument("--format", default="avro", help="Serialization format (default: avro)")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Read schema content from this file")
    source.add_argument("--content", help="Schema content given inline")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schemacache")
    parser.add_argument("--config", help="Path to schemacache.yml")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)
    _add_description_args(sub.add_parser("register", help="Register a schema and print its id"))
    _add_description_args(
        sub.add_parser("lookup", help="Print the id of an already-registered schema")
    )
    p_get = sub.add_parser("get", help="Print the content registered under an id")
    p_get.add_argument("schema_id")
    return parser


def _load_client_config(cli_override: str | None) -> RegistryClientConfig:
    cfg_path = cli_override or find_config_file()
    if cfg_path is None:
        logger.info("Schema registry configuration file not provided; using defaults")
        return RegistryClientConfig()
    logger.info("Schema registry configuration loaded from %s", cfg_path)
    return load_config(cfg_path)


def _read_description(args: argparse.Namespace) -> SchemaDescription:
    if args.file:
        with open(args.file, "r", encoding="utf-8") as fh:
            content = fh.read()
    else:
        content = args.content
    return SchemaDescription(
        group_name=args.group,
        name=args.name,
        serialization_format=args.format,
        content=content,
    )


async def _run(args: argparse.Namespace) -> None:
    config = _load_client_config(args.config)
    async with SchemaRegistryClient.from_config(config) as client:
        if args.cmd == "get":
            schema = await client.get_schema(args.schema_id)
            print(schema.content)
            return
        description = _read_description(args)
        if args.cmd == "register":
            properties = await client.register_schema(description)
        else:
            properties = await client.get_schema_properties(description)
        print(json.dumps(properties.as_dict()))


def main(argv: List[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        asyncio.run(_run(args))
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except NotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(EXIT_NOT_FOUND)
    except SchemaRegistryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(EXIT_SERVICE)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
