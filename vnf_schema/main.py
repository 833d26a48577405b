#!/usr/bin/env python3
"""
VNF config database bootstrap.

Prepares a MongoDB database for the VNF configuration service: application
user, yaml_latest / yaml_history collections and their indexes.

Usage:
    vnf-schema init [--strict] [--skip-user]
    vnf-schema verify [--filename NAME]

Environment Variables:
    MONGO_URI: MongoDB connection string (default: mongodb://localhost:27017)
    MONGO_DATABASE: Target database (default: vnf_config)
    APP_USER_NAME / APP_USER_PASSWORD / APP_USER_ROLE: Application credential
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from vnf_schema.config import LOG_LEVELS, Settings, get_settings
from vnf_schema.database.connections import close_connections, get_mongo_client, ping
from vnf_schema.database.initializer import initialize
from vnf_schema.database.verify import verify
from vnf_schema.exceptions import VnfSchemaError

logger = logging.getLogger("vnf_schema")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vnf-schema",
        description="Bootstrap the MongoDB database of the VNF configuration service",
    )
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: env MONGO_URI)")
    parser.add_argument("--database", default=None, help="Database name (default: env MONGO_DATABASE)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help=(
            "Logging level (default: env LOG_LEVEL). The init completion line "
            "is logged at INFO, so WARNING and ERROR hide it"
        ),
    )

    commands = parser.add_subparsers(dest="command", required=True)

    init_cmd = commands.add_parser("init", help="Create user, collections and indexes")
    init_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Fail if the user or a collection already exists",
    )
    init_cmd.add_argument(
        "--skip-user",
        action="store_true",
        help="Do not provision the application user",
    )

    verify_cmd = commands.add_parser("verify", help="Check an initialized database")
    verify_cmd.add_argument(
        "--filename",
        default="example.yaml",
        help="Filename used for the history query plan check",
    )

    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute one command. Returns the process exit status."""
    client = await get_mongo_client(args.uri)
    try:
        await ping(client)
        logger.info("Connected to MongoDB")

        if args.command == "init":
            report = await initialize(
                client,
                settings,
                strict=args.strict,
                skip_user=args.skip_user,
            )
            logger.debug(f"Init report: {report.model_dump_json()}")
            return 0

        report = await verify(client[settings.mongo_database], filename=args.filename)
        report.raise_for_problems()
        return 0
    finally:
        await close_connections()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        raise SystemExit(f"vnf-schema: invalid configuration: {e}")
    if args.database:
        settings = settings.model_copy(update={"mongo_database": args.database})
    configure_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(run(args, settings))
    except (PyMongoError, VnfSchemaError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
