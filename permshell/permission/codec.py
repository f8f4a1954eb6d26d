"""
Permission Codec - Numeric and symbolic permission representations.

A symbolic mode is ten characters: a type flag ('d' or '-') followed by the
owner, group and other triplets, e.g. "drwxr-xr-x". Only the owner triplet
takes part in authorization; group and other are cosmetic.

All positional inspection of mode strings lives here. Callers use
`classify()` and work with `ModeFlags`.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidInputError

DEFAULT_MODE = "-rw-r--r--"
DIRECTORY_MODE = "drwxr-xr-x"

_SYMBOLIC_RE = re.compile(r"[d-](?:[r-][w-][x-]){3}")
_OCTAL_DIGITS = "01234567"


@dataclass(frozen=True)
class ModeFlags:
    """Capabilities read from a symbolic mode.

    Attributes:
        is_directory: Type flag is 'd'
        is_readable: Owner read slot is 'r'
        is_writable: Owner write slot is 'w'
    """
    is_directory: bool
    is_readable: bool
    is_writable: bool


def encode_triplet(digit: int, is_directory: Optional[bool] = None) -> str:
    """Encode one octal digit as an rwx triplet.

    Args:
        digit: Value 0-7; bit 4 is read, 2 is write, 1 is execute
        is_directory: When given, prefix the type flag ('d' or '-')

    Returns:
        "rwx"-style triplet, or a 4-char string when is_directory is given
    """
    if not 0 <= digit <= 7:
        raise ValueError(f"Permission digit out of range: {digit}")

    triplet = (
        ("r" if digit & 4 else "-")
        + ("w" if digit & 2 else "-")
        + ("x" if digit & 1 else "-")
    )
    if is_directory is None:
        return triplet
    return ("d" if is_directory else "-") + triplet


def encode_numeric(code: str, is_directory: bool) -> str:
    """Convert a 3-digit code such as "755" into a full symbolic mode.

    Args:
        code: Owner, group and other digits
        is_directory: Whether the target is a directory

    Returns:
        10-character symbolic mode

    Raises:
        InvalidInputError: If code is not exactly three octal digits
    """
    if len(code) != 3 or any(c not in _OCTAL_DIGITS for c in code):
        raise InvalidInputError("Use format like 755.")

    owner, group, other = (int(c) for c in code)
    return (
        encode_triplet(owner, is_directory)
        + encode_triplet(group)
        + encode_triplet(other)
    )


def is_symbolic(mode: str) -> bool:
    """Check that a string is a well-formed 10-character symbolic mode."""
    return bool(_SYMBOLIC_RE.fullmatch(mode))


def has_write_bit(mode: str) -> bool:
    """True if any of the three triplets grants write."""
    return "w" in mode[1:]


def classify(mode: str) -> ModeFlags:
    """Read the type flag and owner read/write bits from a symbolic mode."""
    return ModeFlags(
        is_directory=mode[:1] == "d",
        is_readable=mode[1:2] == "r",
        is_writable=mode[2:3] == "w",
    )
