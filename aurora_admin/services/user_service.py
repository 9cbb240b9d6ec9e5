"""User Service — user management over the hosted auth service and `usuarios` table.

Invariants:
    - Profile id == auth account id (the backend trigger creates the profile row)
    - superior_id is passed through sanitize_references before every write
    - update/delete are keyed by id equality; an update matching no row is a 404
    - The password is sent to the auth service only, never to the table API

Design Decisions:
    - create_user tolerates a missing profile row right after sign-up (trigger lag):
      returns a profile synthesized from the input instead of failing
"""

import logging
from typing import Any

from aurora_admin.core.domain_types import Table, UserId, UserStatus
from aurora_admin.core.errors import AuthServiceError, ErrorContext, ResourceNotFoundError
from aurora_admin.core.repository_protocols import AuthGateway, Row, TableGateway
from aurora_admin.core.sanitize_references import (
    USER_REFERENCE_FIELDS, sanitize_references,
)

logger = logging.getLogger(__name__)

# Profile columns sent as auth metadata; the signup trigger copies them
_SIGN_UP_METADATA_FIELDS = ("nome", "role")


class UserService:
    """User CRUD against the hosted backend."""

    def __init__(
        self, tables: TableGateway, auth: AuthGateway, default_password: str,
    ):
        self.tables = tables
        self.auth = auth
        self.default_password = default_password

    async def list_users(self) -> list[Row]:
        return await self.tables.select(
            Table.USERS, "*", order_by="nome", ascending=True,
        )

    async def create_user(self, data: dict[str, Any]) -> Row:
        """Create the auth account, then read back the profile row."""
        profile = dict(data)
        password = profile.pop("senha", None) or self.default_password
        metadata = {k: profile[k] for k in _SIGN_UP_METADATA_FIELDS if k in profile}

        account_id = await self.auth.sign_up(profile["email"], password, metadata)
        if not account_id:
            raise AuthServiceError("Falha ao criar conta de autenticação")
        user_id = UserId(account_id)

        row = await self.tables.select_one(Table.USERS, "*", filters={"id": user_id})
        if row is None:
            logger.warning(
                f"Profile {user_id} not found right after sign-up, returning input data",
                extra={"table": Table.USERS.value, "record_id": user_id},
            )
            return {
                "id": user_id,
                "email": profile["email"],
                "nome": profile.get("nome"),
                "role": profile.get("role"),
                "status": UserStatus.ATIVO.value,
            }

        # Fields the trigger does not copy (superior_id, whatsapp, ...)
        candidates = sanitize_references(
            {
                k: v for k, v in profile.items()
                if k not in _SIGN_UP_METADATA_FIELDS and k != "email" and v is not None
            },
            USER_REFERENCE_FIELDS,
            partial=True,
        )
        extras = {k: v for k, v in candidates.items() if row.get(k) != v}
        if extras:
            row = await self.update_user(user_id, extras)
        logger.info(
            f"User {user_id} created",
            extra={"table": Table.USERS.value, "operation": "create", "record_id": user_id},
        )
        return row

    async def update_user(self, user_id: UserId, updates: dict[str, Any]) -> Row:
        payload = sanitize_references(updates, USER_REFERENCE_FIELDS, partial=True)
        rows = await self.tables.update(Table.USERS, payload, match={"id": user_id})
        if not rows:
            raise ResourceNotFoundError(
                "User", user_id,
                ErrorContext(table=Table.USERS.value, operation="update"),
            )
        logger.info(
            f"User {user_id} updated ({', '.join(sorted(payload)) or 'no fields'})",
            extra={"table": Table.USERS.value, "operation": "update", "record_id": user_id},
        )
        return rows[0]

    async def delete_user(self, user_id: UserId) -> None:
        await self.tables.delete(Table.USERS, match={"id": user_id})
        logger.info(
            f"User {user_id} deleted",
            extra={"table": Table.USERS.value, "operation": "delete", "record_id": user_id},
        )
