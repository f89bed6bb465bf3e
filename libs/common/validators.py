"""Postal code (CEP) format validation."""

from __future__ import annotations

import re

# ASCII digits only; \d would also accept other Unicode decimal digits
CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(code: str) -> bool:
    """Return True if code is exactly 8 ASCII decimal digits.

    fullmatch is used so that a trailing newline ("01001000\\n") is rejected,
    which a "$"-anchored search would let through.

    Example:
        >>> is_valid_cep("01001000")
        True
        >>> is_valid_cep("01001-000")
        False
    """
    return CEP_PATTERN.fullmatch(code) is not None
