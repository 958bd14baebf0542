"""
Ledger tools for the Lending Ledger MCP server.

Tools are the mutating half of the MCP surface:
1. add_item: admit a new item to the catalog (admin only)
2. transfer_admin: hand administrative authority to another principal
3. borrow_item: take one copy of an item
4. return_item: give the copy back

The caller's principal arrives as a tool argument, supplied by the
authenticating client. Each handler validates its arguments with a pydantic
schema, runs the ledger operation, and returns either a ``content``/``data``
response or an ``isError`` response whose ``data.code`` is the ledger's
error taxonomy kind.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..errors import LedgerError
from ..observability import trace_tool
from ..service import LendingLedger

logger = logging.getLogger(__name__)


def _error_response(text: str, code: str) -> dict[str, Any]:
    return {
        "isError": True,
        "content": [{"type": "text", "text": text}],
        "data": {"code": code},
    }


def _ok_response(text: str, data: dict[str, Any]) -> dict[str, Any]:
    return {
        "content": [{"type": "text", "text": text}],
        "data": data,
    }


class PrincipalInput(BaseModel):
    """Fields shared by every tool call."""

    principal: str = Field(
        ...,
        description="Authenticated principal making the request",
        min_length=1,
        examples=["alice", "admin"],
    )


# =============================================================================
# CATALOG TOOLS
# =============================================================================


class AddItemInput(PrincipalInput):
    """Input schema for the add_item tool."""

    name: str = Field(
        ...,
        description="Display name of the item",
        examples=["Dune"],
    )

    copies: int = Field(
        ...,
        description="Number of copies owned; 0 is treated as 1",
        ge=0,
        examples=[1, 6],
    )

    author: str = Field(
        ...,
        description="Author of the item",
        examples=["Herbert"],
    )


class TransferAdminInput(PrincipalInput):
    """Input schema for the transfer_admin tool."""

    new_principal: str = Field(
        ...,
        description="Principal that becomes the ledger admin",
        min_length=1,
    )


@trace_tool("add_item")
async def add_item_handler(ledger: LendingLedger, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the add_item tool.

    Args:
        ledger: The ledger service
        arguments: Raw arguments from the tools/call request

    Returns:
        The new item's snapshot, or an error response
    """
    try:
        params = AddItemInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid add_item parameters: %s", e)
        return _error_response(f"Invalid add_item parameters: {e}", "ValidationError")

    try:
        item_id = ledger.add_item(params.principal, params.name, params.copies, params.author)
    except LedgerError as e:
        logger.info("add_item rejected (%s): %s", e.code, e)
        return _error_response(str(e), e.code)
    except Exception as e:
        logger.exception("Unexpected error in add_item tool")
        return _error_response(f"An unexpected error occurred: {e!s}", "InternalError")

    item = ledger.get_item(item_id)
    return _ok_response(
        f"Added '{item.name}' by {item.author} with {item.total_copies} "
        f"{'copy' if item.total_copies == 1 else 'copies'}.",
        {"item": item.model_dump(mode="json")},
    )


@trace_tool("transfer_admin")
async def transfer_admin_handler(
    ledger: LendingLedger, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Handler for the transfer_admin tool."""
    try:
        params = TransferAdminInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid transfer_admin parameters: %s", e)
        return _error_response(f"Invalid transfer_admin parameters: {e}", "ValidationError")

    try:
        ledger.transfer_admin(params.principal, params.new_principal)
    except LedgerError as e:
        logger.info("transfer_admin rejected (%s): %s", e.code, e)
        return _error_response(str(e), e.code)
    except Exception as e:
        logger.exception("Unexpected error in transfer_admin tool")
        return _error_response(f"An unexpected error occurred: {e!s}", "InternalError")

    return _ok_response(
        f"Admin authority transferred to '{params.new_principal}'.",
        {"admin": params.new_principal},
    )


# =============================================================================
# CIRCULATION TOOLS
# =============================================================================


class ItemActionInput(PrincipalInput):
    """Input schema for the borrow_item and return_item tools."""

    item_id: str = Field(
        ...,
        description="Identifier of the item",
        min_length=1,
    )


@trace_tool("borrow_item")
async def borrow_item_handler(ledger: LendingLedger, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the borrow_item tool.

    Fails with ItemNotFound, ItemUnavailable or AlreadyBorrowing, in that
    order of precedence.
    """
    try:
        params = ItemActionInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid borrow parameters: %s", e)
        return _error_response(f"Invalid borrow parameters: {e}", "ValidationError")

    try:
        ledger.borrow(params.principal, params.item_id)
    except LedgerError as e:
        logger.info("Borrow rejected (%s): %s", e.code, e)
        return _error_response(str(e), e.code)
    except Exception as e:
        logger.exception("Unexpected error in borrow_item tool")
        return _error_response(f"An unexpected error occurred: {e!s}", "InternalError")

    item = ledger.get_item(params.item_id)
    return _ok_response(
        f"'{params.principal}' borrowed '{item.name}'. "
        f"{item.available_copies} of {item.total_copies} copies remain.",
        {"item": item.model_dump(mode="json"), "principal": params.principal},
    )


@trace_tool("return_item")
async def return_item_handler(ledger: LendingLedger, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the return_item tool."""
    try:
        params = ItemActionInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid return parameters: %s", e)
        return _error_response(f"Invalid return parameters: {e}", "ValidationError")

    try:
        ledger.return_item(params.principal, params.item_id)
    except LedgerError as e:
        logger.info("Return rejected (%s): %s", e.code, e)
        return _error_response(str(e), e.code)
    except Exception as e:
        logger.exception("Unexpected error in return_item tool")
        return _error_response(f"An unexpected error occurred: {e!s}", "InternalError")

    item = ledger.get_item(params.item_id)
    return _ok_response(
        f"'{params.principal}' returned '{item.name}'.",
        {"item": item.model_dump(mode="json"), "principal": params.principal},
    )
