"""UUID Validation — format check and sanitization for record references.

Invariants:
    - is_uuid(value) is True iff value is a str in canonical 8-4-4-4-12 hex form
    - Matching is case-insensitive and anchored at both ends (no surrounding chars)
    - sanitize_uuid returns the input unchanged when valid, None otherwise
    - Neither function raises, for any input

Design Decisions:
    - Regex over uuid.UUID(): uuid.UUID also accepts braces, urn: prefixes and
      unhyphenated hex, which are not valid reference values here
    - fullmatch over $-anchored search: "$" tolerates a trailing newline
"""

import re
from typing import Any

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_uuid(value: Any) -> bool:
    """Return True if value is a canonical hyphenated UUID string."""
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value) is not None


def sanitize_uuid(value: Any) -> str | None:
    """Return value if it is a valid UUID string, else None.

    Used on reference fields (superior_id, promotor_id, parceiro_id) so that
    placeholders from the admin forms ("", "TODOS", mock ids) never reach a
    foreign-key column.
    """
    return value if is_uuid(value) else None
