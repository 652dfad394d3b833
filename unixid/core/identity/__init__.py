"""
Unix identity model: uid / gid principals and the queries authorization
code runs over them.

`ROOT` and `NOBODY` are read-only; call `.copy()` for a mutable variant.
"""

from unixid.core.identity.models import GidPrincipal, Identity, Principal, UidPrincipal, UnixRecord
from unixid.core.identity.subjects import (
    NO_UID,
    NOBODY,
    ROOT,
    describe,
    get_gids,
    get_primary_gid,
    get_uid,
    get_uids,
    has_gid,
    has_uid,
    identity_from_record,
    is_nobody,
    is_root,
    make_identity,
    unique_principal,
)

__all__ = [
    "UidPrincipal",
    "GidPrincipal",
    "Principal",
    "Identity",
    "UnixRecord",
    "ROOT",
    "NOBODY",
    "NO_UID",
    "make_identity",
    "identity_from_record",
    "is_root",
    "is_nobody",
    "has_uid",
    "has_gid",
    "get_uids",
    "get_uid",
    "get_gids",
    "get_primary_gid",
    "unique_principal",
    "describe",
]
