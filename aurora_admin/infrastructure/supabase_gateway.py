"""Supabase Gateway — TableGateway and AuthGateway over the supabase-py async client.

Invariants:
    - One AsyncClient per process, created on startup via init_backend()
    - PostgREST errors → BackendAPIError; transport errors → BackendAPIError("connection")
    - Auth errors → AuthServiceError (4xx from the auth service → 400 to the caller)
    - No retries: the admin operator re-triggers the action

Design Decisions:
    - Singleton `backend` initialized in lifespan (no import-time network IO)
    - get_table_gateway / get_auth_gateway are FastAPI dependencies so tests can
      override them with in-memory fakes
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from supabase import AsyncClient, AuthError, PostgrestAPIError, acreate_client

from aurora_admin.core.errors import (
    AuroraError, AuthServiceError, BackendAPIError, ErrorContext,
)
from aurora_admin.core.domain_types import Table
from aurora_admin.core.repository_protocols import Row

logger = logging.getLogger(__name__)


def _table_name(table: Any) -> str:
    return getattr(table, "value", table)


class SupabaseTableGateway:
    """Hosted table API access with error mapping."""

    def __init__(self, client: AsyncClient):
        self._client = client

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
    ) -> list[Row]:
        name = _table_name(table)
        query = self._client.table(name).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, _plain(value))
        for column, value in (gte or {}).items():
            query = query.gte(column, _plain(value))
        for column, values in (in_ or {}).items():
            query = query.in_(column, [_plain(v) for v in values])
        if order_by:
            query = query.order(order_by, desc=not ascending)
        if limit is not None:
            query = query.limit(limit)
        return await self._execute(query, name, "select")

    async def select_one(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, Any],
    ) -> Row | None:
        rows = await self.select(table, columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]:
        name = _table_name(table)
        query = self._client.table(name).insert([dict(r) for r in rows])
        return await self._execute(query, name, "insert")

    async def update(
        self, table: str, values: Mapping[str, Any], *, match: Mapping[str, Any],
    ) -> list[Row]:
        name = _table_name(table)
        query = self._client.table(name).update(dict(values))
        for column, value in match.items():
            query = query.eq(column, _plain(value))
        return await self._execute(query, name, "update")

    async def delete(self, table: str, *, match: Mapping[str, Any]) -> None:
        name = _table_name(table)
        query = self._client.table(name).delete()
        for column, value in match.items():
            query = query.eq(column, _plain(value))
        await self._execute(query, name, "delete")

    async def _execute(self, query, table: str, operation: str) -> list[Row]:
        """Run a PostgREST request, mapping failures to BackendAPIError."""
        context = ErrorContext(table=table, operation=operation)
        try:
            response = await query.execute()
        except PostgrestAPIError as e:
            logger.error(
                f"Table API {operation} on {table} failed: {e.message}",
                extra={"table": table, "operation": operation, "error_code": e.code},
            )
            raise BackendAPIError(
                e.message or str(e), operation,
                backend_code=e.code, context=context,
            )
        except httpx.HTTPError as e:
            logger.error(
                f"Table API {operation} on {table} unreachable: {e}",
                extra={"table": table, "operation": operation},
            )
            raise BackendAPIError(
                "Hosted backend unreachable", operation, context=context,
            )
        return list(response.data or [])


class SupabaseAuthGateway:
    """Hosted authentication service access with error mapping."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def sign_up(
        self, email: str, password: str, metadata: Mapping[str, Any] | None = None,
    ) -> str | None:
        credentials: dict[str, Any] = {"email": email, "password": password}
        if metadata:
            credentials["options"] = {"data": dict(metadata)}
        try:
            response = await self._client.auth.sign_up(credentials)
        except AuthError as e:
            status = getattr(e, "status", None)
            logger.error(
                f"Auth sign_up failed: {e.message}",
                extra={"operation": "sign_up", "error_code": getattr(e, "code", None)},
            )
            raise AuthServiceError(e.message, status=status)
        except httpx.HTTPError as e:
            logger.error(f"Auth service unreachable: {e}", extra={"operation": "sign_up"})
            raise AuthServiceError("Authentication service unreachable")
        return response.user.id if response.user else None


def _plain(value: Any) -> Any:
    """Enum members and UUIDs go over the wire as their string form."""
    value = getattr(value, "value", value)
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class SupabaseBackend:
    """Holds the process-wide client and the gateways built on it."""

    def __init__(self, client: AsyncClient):
        self.client = client
        self.tables = SupabaseTableGateway(client)
        self.auth = SupabaseAuthGateway(client)

    async def health_check(self) -> bool:
        """Check table API connectivity (for the readiness check)."""
        try:
            await self.tables.select(Table.USERS, "id", limit=1)
            return True
        except AuroraError as e:
            logger.error(f"Backend health check failed: {e}")
            return False


# Singleton (initialized on startup)
backend: SupabaseBackend | None = None


async def init_backend(url: str, key: str) -> SupabaseBackend:
    """Create the async Supabase client and module singleton."""
    global backend
    client = await acreate_client(url, key)
    backend = SupabaseBackend(client)
    logger.info("Supabase client initialized")
    return backend


def get_table_gateway() -> SupabaseTableGateway:
    """FastAPI dependency for the table API."""
    if not backend:
        raise RuntimeError("Backend not initialized")
    return backend.tables


def get_auth_gateway() -> SupabaseAuthGateway:
    """FastAPI dependency for the auth service."""
    if not backend:
        raise RuntimeError("Backend not initialized")
    return backend.auth
