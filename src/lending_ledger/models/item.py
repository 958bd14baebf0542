"""
Item model for the lending ledger.

An item is a catalog entry for a lendable work with a fixed number of copies.
Items are created once by catalog admission and afterwards only their
``active_loans`` counter moves, driven by the lending state machine.

The identifier is derived deterministically from the display name and the
author. Two schemes are supported:

- ``hashed``: a digest of the structured (name, author) pair. Distinct pairs
  never share an identifier.
- ``concat``: the raw concatenation ``name + author``, kept for byte-for-byte
  compatibility with legacy identifiers. ``("Foo", "Bar")`` and
  ``("Fo", "oBar")`` collide under this scheme.
"""

import hashlib
import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IdentifierScheme(str, Enum):
    """How item identifiers are derived from (name, author)."""

    HASHED = "hashed"
    CONCAT = "concat"


def derive_item_id(
    name: str, author: str, scheme: IdentifierScheme | str = IdentifierScheme.HASHED
) -> str:
    """
    Derive the catalog identifier for a (name, author) pair.

    Args:
        name: Display name of the item
        author: Author of the item
        scheme: Identifier scheme (default hashed)

    Returns:
        The item identifier
    """
    scheme = IdentifierScheme(scheme)
    if scheme == IdentifierScheme.CONCAT:
        return name + author

    # JSON encoding keeps the pair boundary explicit
    encoded = json.dumps([name, author], ensure_ascii=False).encode("utf-8")
    return "item_" + hashlib.sha256(encoded).hexdigest()[:32]


class Item(BaseModel):
    """
    Represents a lendable work in the catalog.

    The invariant ``0 <= active_loans <= total_copies`` is checked on
    construction and on every assignment, so a transition that would break
    it fails loudly instead of corrupting the catalog.
    """

    item_id: str = Field(
        ...,
        description="Identifier derived from name and author",
        min_length=1,
    )

    name: str = Field(
        ...,
        description="Display name of the item",
        min_length=1,
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        ...,
        description="Author of the item",
        min_length=1,
        examples=["Herbert", "Le Guin"],
    )

    total_copies: int = Field(
        ...,
        description="Number of copies owned",
        ge=1,
        examples=[1, 6],
    )

    active_loans: int = Field(
        default=0,
        description="Copies currently out on loan",
        ge=0,
    )

    @model_validator(mode="after")
    def validate_loans(self) -> "Item":
        """Active loans can never exceed the copies owned."""
        if self.active_loans > self.total_copies:
            raise ValueError("Active loans cannot exceed total copies")
        return self

    @property
    def available_copies(self) -> int:
        """Copies that can still be borrowed."""
        return self.total_copies - self.active_loans

    @property
    def is_available(self) -> bool:
        """Check if at least one copy can be borrowed."""
        return self.active_loans < self.total_copies

    model_config = ConfigDict(
        # Re-run the loans invariant whenever the state machine moves the counter
        validate_assignment=True,
        validate_default=True,
        json_schema_extra={
            "example": {
                "item_id": "item_3f1c0a9b8e7d6c5b4a39281706f5e4d3",
                "name": "Dune",
                "author": "Herbert",
                "total_copies": 6,
                "active_loans": 1,
            }
        },
    )
