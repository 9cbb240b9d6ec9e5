"""Boundary Protocols — contracts between services and the hosted backend.

Invariants:
    - Services NEVER import the Supabase SDK — they see only these protocols
    - Gateways return plain dicts (JSON rows), never SDK response objects
    - Every gateway failure surfaces as an AuroraError subclass (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Filters are equality / gte / in_ dicts: the only PostgREST operators the
      admin screens use
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Row = dict[str, Any]


class TableGateway(Protocol):
    """Contract for the hosted table API — implemented by infrastructure."""
    async def select(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, Any] | None = None,
        gte: Mapping[str, Any] | None = None,
        in_: Mapping[str, Sequence[Any]] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[Row]: ...
    async def select_one(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, Any],
    ) -> Row | None: ...
    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]: ...
    async def update(
        self, table: str, values: Mapping[str, Any], *, match: Mapping[str, Any],
    ) -> list[Row]: ...
    async def delete(self, table: str, *, match: Mapping[str, Any]) -> None: ...


class AuthGateway(Protocol):
    """Contract for the hosted authentication service — implemented by infrastructure."""
    async def sign_up(
        self, email: str, password: str, metadata: Mapping[str, Any] | None = None,
    ) -> str | None: ...
