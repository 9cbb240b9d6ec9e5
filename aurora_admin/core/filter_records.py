"""Record Filtering — search and grouping behind the admin list screens.

Invariants:
    - Matching is case-insensitive substring of the term as typed (no trimming);
      an empty or missing term matches everything
    - Input order is preserved
    - A missing/None field never matches a non-empty term
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from aurora_admin.core.domain_types import Role

ALL_PROMOTERS = "TODOS"

Record = Mapping[str, Any]


def _contains(value: Any, needle: str) -> bool:
    if not isinstance(value, str):
        return False
    return needle in value.lower()


def _matches_any(record: Record, fields: Iterable[str], term: str | None) -> bool:
    needle = (term or "").lower()
    if not needle:
        return True
    return any(_contains(record.get(f), needle) for f in fields)


def filter_users(users: Sequence[Record], term: str | None) -> list[Record]:
    """Users whose nome or email contains term."""
    return [u for u in users if _matches_any(u, ("nome", "email"), term)]


def filter_pdvs(
    pdvs: Sequence[Record],
    term: str | None,
    promotor_id: str | None = ALL_PROMOTERS,
) -> list[Record]:
    """PDVs whose nome_fantasia or cidade contains term, optionally of one promoter."""
    any_promoter = promotor_id in (None, "", ALL_PROMOTERS)
    return [
        p for p in pdvs
        if _matches_any(p, ("nome_fantasia", "cidade"), term)
        and (any_promoter or p.get("promotor_id") == promotor_id)
    ]


def split_by_role(users: Iterable[Record]) -> tuple[list[Record], list[Record]]:
    """Split users into (promoters, partners). Admins belong to neither."""
    promoters: list[Record] = []
    partners: list[Record] = []
    for user in users:
        role = user.get("role")
        if role == Role.PROMOTOR.value:
            promoters.append(user)
        elif role == Role.PARCEIRO.value:
            partners.append(user)
    return promoters, partners
