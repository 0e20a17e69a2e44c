"""
Sub-account code helpers.
Dot notation lets users type "570.1" instead of the full zero-padded "5700000001".
All functions here are pure; nothing touches the database.
"""

import re
from typing import Iterator, Optional

from quickcreate.core.config import settings


_PARENT_PREFIX_RE = re.compile(r"^\d{2,4}$")
_DOT_PREFIX_RE = re.compile(r"^(\d+)\.(\d*)$")


def transform_subaccount_code(code: Optional[str], length: Optional[int] = None) -> str:
    """
    Expand dot notation into a fixed-length sub-account code.

    Rules:
    - Surrounding whitespace is stripped first.
    - Codes without a dot are returned as-is (no validation, no truncation).
    - Codes with more than one dot are ambiguous and returned as-is.
    - Otherwise the prefix is right-padded with '0' to (length - len(suffix))
      and the suffix appended. A prefix that is already long enough is kept whole.

    Examples:
        570.1,   10 -> 5700000001
        43.1,     6 -> 430001
        570.1.2, 10 -> 570.1.2
        .,       10 -> 0000000000
    """
    if not code:
        return ""
    code = code.strip()
    if "." not in code:
        return code

    if length is None:
        length = settings.default_subaccount_code_length
    parts = code.split(".")
    if len(parts) != 2:
        return code

    prefix, suffix = parts
    return prefix.ljust(length - len(suffix), "0") + suffix


def build_candidate_code(parent_code: str, suffix: int, length: int) -> str:
    """Pad parent_code with zeros and append suffix, e.g. ("629", 1, 10) -> "6290000001"."""
    text = str(suffix)
    return parent_code.ljust(length - len(text), "0") + text


def parent_code_candidates(subaccount_code: str) -> Iterator[str]:
    """
    Possible parent account codes for a full sub-account code, longest first.
    Starts by dropping the last 2 characters, then one more per step down to 1 character.
    """
    candidate = subaccount_code[:-2]
    while len(candidate) >= 1:
        yield candidate
        candidate = candidate[:-1]


def looks_like_parent_prefix(query: str) -> bool:
    """True for a bare 2-4 digit account prefix such as "430"."""
    return bool(_PARENT_PREFIX_RE.match(query.strip()))


def split_dot_prefix(query: str) -> Optional[str]:
    """Return the account part of a dotted query ("570." or "570.12" -> "570"), else None."""
    match = _DOT_PREFIX_RE.match(query.strip())
    return match.group(1) if match else None
