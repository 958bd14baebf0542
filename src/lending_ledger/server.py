"""Lending Ledger MCP Server

Exposes the ledger's operation surface over the Model Context Protocol:
tools for the mutating operations (add_item, transfer_admin, borrow_item,
return_item) and resources for the read queries (available items, loan
history). The ledger itself is constructed once at startup from the
configuration and owned by the server.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from lending_ledger.config import LedgerConfig, get_config
from lending_ledger.observability import initialize_observability
from lending_ledger.resources import history_handler, list_available_handler
from lending_ledger.service import LendingLedger, build_ledger
from lending_ledger.tools import (
    add_item_handler,
    borrow_item_handler,
    return_item_handler,
    transfer_admin_handler,
)

logger = logging.getLogger(__name__)


def create_server(ledger: LendingLedger, config: LedgerConfig) -> FastMCP:
    """Build the FastMCP server and register the ledger's tools and resources."""
    mcp = FastMCP(
        name=config.server_name,
        instructions=(
            "Lending Ledger - tracks a catalog of items with finite copies, who "
            "currently holds a copy, and an append-only loan history. Use the tools "
            "to add items (admin only), borrow and return copies; use the resources "
            "to list available items and read an item's loan history."
        ),
    )

    # === Tools ===

    @mcp.tool(name="add_item", description="Add an item to the catalog (admin only)")
    async def add_item(principal: str, name: str, copies: int, author: str) -> dict[str, Any]:
        return await add_item_handler(
            ledger, {"principal": principal, "name": name, "copies": copies, "author": author}
        )

    @mcp.tool(name="transfer_admin", description="Hand admin authority to another principal")
    async def transfer_admin(principal: str, new_principal: str) -> dict[str, Any]:
        return await transfer_admin_handler(
            ledger, {"principal": principal, "new_principal": new_principal}
        )

    @mcp.tool(name="borrow_item", description="Borrow one copy of an item")
    async def borrow_item(principal: str, item_id: str) -> dict[str, Any]:
        return await borrow_item_handler(ledger, {"principal": principal, "item_id": item_id})

    @mcp.tool(name="return_item", description="Return a borrowed copy of an item")
    async def return_item(principal: str, item_id: str) -> dict[str, Any]:
        return await return_item_handler(ledger, {"principal": principal, "item_id": item_id})

    # === Resources ===

    @mcp.resource(
        "ledger://items/available",
        name="Available Items",
        description="Items with at least one copy free to borrow, in catalog order",
        mime_type="application/json",
    )
    async def available_items() -> dict[str, Any]:
        return await list_available_handler(ledger)

    @mcp.resource(
        "ledger://history/{item_name}",
        name="Loan History",
        description="Loan records for an item name, oldest first",
        mime_type="application/json",
    )
    async def loan_history(item_name: str) -> dict[str, Any]:
        return await history_handler(ledger, item_name)

    logger.info("Registered 4 ledger tools and 2 ledger resources")
    return mcp


def configure_logging(config: LedgerConfig) -> None:
    """Log to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def run_transport(mcp: FastMCP, config: LedgerConfig) -> None:
    """Serve ``mcp`` over the configured transport."""
    if config.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        logger.info("Listening on http://%s:%d", config.http_host, config.http_port)
        mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)


def main() -> None:
    """Entry point for ``lending-ledger`` and ``python -m lending_ledger.server``."""
    config = get_config()
    configure_logging(config)
    initialize_observability(config)

    logger.info("=" * 60)
    logger.info("Lending Ledger MCP Server")
    logger.info("Version: %s", config.server_version)
    logger.info("Transport: %s", config.transport)
    logger.info("Debug Mode: %s", config.debug)
    logger.info("=" * 60)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        ledger = build_ledger(config)
        mcp = create_server(ledger, config)
        run_transport(mcp, config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
