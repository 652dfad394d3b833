from __future__ import annotations

"""
Queries and constructors over Identity.

Authorization code leans on these to decide super-user bypass, group ACLs
and primary-group ownership. Ambiguous data is raised, never resolved by
picking one principal.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError

from unixid.core.errors import AmbiguousPrincipalError, PrincipalNotFoundError, ValidationError
from unixid.core.identity.models import GidPrincipal, Identity, UidPrincipal, UnixRecord

log = logging.getLogger("unixid.identity")

NO_UID = -1

T = TypeVar("T", UidPrincipal, GidPrincipal)


def _frozen(*principals: Any) -> Identity:
    ident = Identity(principals)
    ident.set_read_only()
    return ident


ROOT: Identity = _frozen(UidPrincipal(0), GidPrincipal(0, True))
NOBODY: Identity = _frozen()


# ---- construction ----
def make_identity(uid: int, primary_gid: int, *supplementary_gids: int) -> Identity:
    ident = Identity()
    ident.add(UidPrincipal(uid))
    ident.add(GidPrincipal(primary_gid, True))
    for g in supplementary_gids:
        ident.add(GidPrincipal(g, False))
    return ident


def identity_from_record(record: Union[UnixRecord, Mapping[str, Any]]) -> Identity:
    """
    Build an identity from a unix account record.

    Mappings are validated first; bad input raises ValidationError.
    """
    if not isinstance(record, UnixRecord):
        try:
            record = UnixRecord.model_validate(dict(record))
        except PydanticValidationError as e:
            raise ValidationError("Invalid unix record.", errors=[err.get("msg") for err in e.errors()]) from e
    return make_identity(record.uid, record.gid, *record.gids)


# ---- classification ----
def is_root(identity: Identity) -> bool:
    return has_uid(identity, 0)


def is_nobody(identity: Identity) -> bool:
    """
    True when the identity carries no uid.

    Nobody is not anonymous: the entity may well be authenticated, it just
    was not mapped to an internal user.
    """
    return not identity.principals(UidPrincipal)


def has_uid(identity: Identity, uid: int) -> bool:
    return any(p.uid == uid for p in identity.principals(UidPrincipal))


def has_gid(identity: Identity, gid: int) -> bool:
    return any(p.gid == gid for p in identity.principals(GidPrincipal))


# ---- extraction ----
def get_uids(identity: Identity) -> List[int]:
    return [p.uid for p in identity.principals(UidPrincipal)]


def unique_principal(identity: Optional[Identity], kind: Type[T]) -> Optional[T]:
    if identity is None:
        return None
    found = identity.principals(kind)
    if len(found) > 1:
        log.debug("Ambiguous %s in %r", kind.__name__, identity)
        raise AmbiguousPrincipalError(f"Identity has multiple principals of type {kind.__name__}.", kind=kind.__name__, count=len(found))
    return found[0] if found else None  # type: ignore[return-value]


def get_uid(identity: Optional[Identity]) -> int:
    """
    Return the single uid, or NO_UID when there is none.

    Raises AmbiguousPrincipalError when the identity has several uids.
    """
    p = unique_principal(identity, UidPrincipal)
    if p is None:
        return NO_UID
    return p.uid


def get_gids(identity: Identity) -> List[int]:
    """
    Return one gid per group principal.

    With exactly one primary group its gid comes first; otherwise the gids
    are returned in insertion order with no special first element.
    """
    groups = identity.principals(GidPrincipal)
    primaries = [p for p in groups if p.is_primary]
    if len(primaries) != 1:
        return [p.gid for p in groups]
    primary = primaries[0]
    return [primary.gid] + [p.gid for p in groups if p is not primary]


def get_primary_gid(identity: Identity) -> int:
    primaries = [p for p in identity.principals(GidPrincipal) if p.is_primary]
    if not primaries:
        log.debug("No primary gid in %r", identity)
        raise PrincipalNotFoundError("Identity has no primary GID.", kind="GidPrincipal")
    if len(primaries) > 1:
        log.debug("Multiple primary gids in %r", identity)
        raise AmbiguousPrincipalError("Identity has multiple primary GIDs.", kind="GidPrincipal", count=len(primaries))
    return primaries[0].gid


def describe(identity: Identity) -> Dict[str, Any]:
    """Flat uid/gid fields for log lines; never raises on malformed identities."""
    uids = get_uids(identity)
    primaries = [p.gid for p in identity.principals(GidPrincipal) if p.is_primary]
    return {
        "uid": uids[0] if len(uids) == 1 else None,
        "gid": primaries[0] if len(primaries) == 1 else None,
        "gids": get_gids(identity),
    }
