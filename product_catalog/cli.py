"""Command Line — thin consumer of the product service API surface.

Invariants:
    - Every command prints exactly one result envelope as JSON on stdout
    - Exit code 0 iff the envelope succeeded
    - Logging goes to stderr, configured from settings before any command runs

Design Decisions:
    - argparse subcommands over a third-party CLI framework: four commands, no plugins
    - Ctrl-C sets the cancel event instead of killing the loop, so the
      service reports a 408 envelope
"""

import argparse
import asyncio
import json
import signal
import sys
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path

from product_catalog.bootstrap import build_product_service
from product_catalog.config import get_settings
from product_catalog.core.domain_types import EntityId
from product_catalog.core.results import ServiceResult
from product_catalog.infrastructure.observability import setup_logging
from product_catalog.schemas.product import (
    ProductCreateRequest, ProductUpdateRequest,
)
from product_catalog.services.product_service import ProductService


def _decimal(value: str) -> Decimal:
    try:
        price = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid price: {value!r}")
    if not price.is_finite():
        raise argparse.ArgumentTypeError(f"invalid price: {value!r}")
    return price


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-catalog", description="Manage the JSON product catalog",
    )
    parser.add_argument(
        "--data-dir", type=Path, default=None,
        help="Directory holding the store files (default: CATALOG_DATA_DIR or ./data)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all products")

    create = commands.add_parser("create", help="Create a product")
    create.add_argument("--name", required=True)
    create.add_argument("--price", type=_decimal, required=True)

    update = commands.add_parser("update", help="Update a product by id")
    update.add_argument("--id", required=True)
    update.add_argument("--name", required=True)
    update.add_argument("--price", type=_decimal, required=True)
    update.add_argument("--category", default=None, help="Blank or omitted clears it")
    update.add_argument("--manufacturer", default=None, help="Blank or omitted clears it")

    delete = commands.add_parser("delete", help="Delete a product by id")
    delete.add_argument("--id", required=True)
    return parser


async def run_command(
    service: ProductService, args: argparse.Namespace,
    cancel: asyncio.Event | None = None,
) -> ServiceResult:
    """Dispatch one parsed command to the service."""
    if args.command == "list":
        return await service.list_products(cancel)
    if args.command == "create":
        return await service.create_product(
            ProductCreateRequest(name=args.name, price=args.price), cancel,
        )
    if args.command == "update":
        return await service.update_product(
            ProductUpdateRequest(
                id=args.id, name=args.name, price=args.price,
                category_name=args.category,
                manufacturer_name=args.manufacturer,
            ),
            cancel,
        )
    if args.command == "delete":
        return await service.delete_product(EntityId(args.id), cancel)
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace) -> ServiceResult:
    settings = get_settings()
    if args.data_dir:
        settings = settings.model_copy(update={"data_dir": args.data_dir})
    service = build_product_service(settings)

    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.set)
    except (NotImplementedError, RuntimeError):
        pass  # no signal support (e.g. Windows, non-main thread)
    return await run_command(service, args, cancel)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    result = asyncio.run(_run(args))
    json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0 if result.succeeded else 1
