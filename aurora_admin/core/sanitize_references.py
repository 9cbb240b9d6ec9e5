"""Reference Sanitization — scrub foreign-key-like fields out of write payloads.

Invariants:
    - Only the named reference fields are touched; every other field passes through
    - partial=True (update): a reference field is sanitized only if present,
      so absent fields stay absent and the stored value is left alone
    - partial=False (insert): every named reference field is written, invalid → None
    - Input payloads are never mutated

Design Decisions:
    - Reference fields declared per collection, not inferred from a "_id" suffix
"""

from collections.abc import Iterable, Mapping
from typing import Any

from aurora_admin.core.validate_uuid import sanitize_uuid

USER_REFERENCE_FIELDS: tuple[str, ...] = ("superior_id",)
PDV_REFERENCE_FIELDS: tuple[str, ...] = ("promotor_id", "parceiro_id")

# Embedded resources returned by PostgREST joins, never columns.
PDV_JOIN_FIELDS: tuple[str, ...] = ("promotor", "parceiro")


def sanitize_references(
    payload: Mapping[str, Any],
    fields: Iterable[str],
    *,
    partial: bool,
) -> dict[str, Any]:
    """Return a copy of payload with reference fields passed through sanitize_uuid."""
    sanitized = dict(payload)
    for name in fields:
        if name in sanitized:
            sanitized[name] = sanitize_uuid(sanitized[name])
        elif not partial:
            sanitized[name] = None
    return sanitized


def strip_join_fields(
    payload: Mapping[str, Any], join_fields: Iterable[str],
) -> dict[str, Any]:
    """Return a copy of payload without embedded join fields."""
    dropped = set(join_fields)
    return {k: v for k, v in payload.items() if k not in dropped}
