"""
Permission System - Simulated Unix-style permissions over the working tree.

Provides:
- PermissionStore: Durable name → symbolic mode table with a default mode
- AuthorizationGate: Per-operation decisions with a one-shot override
- Operation / GateState: Enums the gate works with
- Codec helpers: encode_triplet, encode_numeric, classify, ModeFlags

The simulated model overlays the host's real permissions; it never changes
them.
"""

from .codec import (
    DEFAULT_MODE,
    DIRECTORY_MODE,
    ModeFlags,
    classify,
    encode_numeric,
    encode_triplet,
    has_write_bit,
    is_symbolic,
)
from .gate import AuthorizationGate, GateState, Operation
from .store import PermissionStore

__all__ = [
    "DEFAULT_MODE",
    "DIRECTORY_MODE",
    "ModeFlags",
    "classify",
    "encode_numeric",
    "encode_triplet",
    "has_write_bit",
    "is_symbolic",
    "AuthorizationGate",
    "GateState",
    "Operation",
    "PermissionStore",
]
