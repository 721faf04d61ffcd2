"""Claim sets: reserved claim names, structural validation and the time window."""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional, Union

from .crypto import stabilise_json
from .errors import InvalidClaims, TokenExpired, TokenNotYetValid

ClaimSet = Mapping[str, Any]
TimeValue = Union[int, float, datetime]

ISSUER = "iss"
SUBJECT = "sub"
AUDIENCE = "aud"
EXPIRATION = "exp"
NOT_BEFORE = "nbf"
ISSUED_AT = "iat"
RESOURCE = "res"

STRING_CLAIMS = (ISSUER, SUBJECT, AUDIENCE)
TIME_CLAIMS = (EXPIRATION, NOT_BEFORE, ISSUED_AT)

# 9999-12-31T23:59:59Z
MAX_NUMERIC_DATE = 253_402_300_799


def numeric_date(value: TimeValue) -> Union[int, float]:
    """Seconds since the epoch; naive datetimes are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if not _is_number(value):
        raise TypeError("NumericDate must be a finite number or a datetime")
    return value


def current_time(now: Optional[TimeValue] = None) -> Union[int, float]:
    if now is None:
        return int(time.time())
    return numeric_date(now)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return abs(value) <= MAX_NUMERIC_DATE


def validate_claims(claims: ClaimSet) -> Dict[str, Any]:
    """Check the structural invariants and return a private copy of ``claims``."""
    if not isinstance(claims, Mapping):
        raise InvalidClaims("claims must be a mapping")
    copied = dict(claims)

    bad_keys = [k for k in copied if not isinstance(k, str)]
    if bad_keys:
        raise InvalidClaims("claim names must be strings", {"count": len(bad_keys)})

    for name in STRING_CLAIMS:
        if name in copied:
            value = copied[name]
            if not isinstance(value, str) or not value:
                raise InvalidClaims(f"'{name}' must be a non-empty string", {"claim": name})

    for name in TIME_CLAIMS:
        if name in copied and not _is_number(copied[name]):
            raise InvalidClaims(f"'{name}' must be a NumericDate", {"claim": name})

    if EXPIRATION in copied and NOT_BEFORE in copied and not copied[EXPIRATION] > copied[NOT_BEFORE]:
        raise InvalidClaims("'exp' must be later than 'nbf'", {"claim": EXPIRATION})

    try:
        stabilise_json(copied)
    except (TypeError, ValueError) as exc:
        raise InvalidClaims("claims are not JSON serialisable") from exc
    return copied


def build_claims(
    subject: str,
    *,
    issuer: Optional[str] = None,
    audience: Optional[str] = None,
    expiration: Optional[TimeValue] = None,
    not_before: Optional[TimeValue] = None,
    lifetime: Optional[timedelta] = None,
    now: Optional[TimeValue] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Assemble a claim set; ``exp`` defaults to ``now + lifetime`` when only a lifetime is given."""
    claims: Dict[str, Any] = dict(extra)
    claims[SUBJECT] = subject
    if issuer is not None:
        claims[ISSUER] = issuer
    if audience is not None:
        claims[AUDIENCE] = audience
    if expiration is not None:
        claims[EXPIRATION] = numeric_date(expiration)
    elif lifetime is not None:
        claims[EXPIRATION] = int(current_time(now) + lifetime.total_seconds())
    if not_before is not None:
        claims[NOT_BEFORE] = numeric_date(not_before)
    return validate_claims(claims)


def check_time_window(claims: ClaimSet, now: Optional[TimeValue] = None, leeway: Union[int, float] = 0) -> None:
    """Raise unless ``nbf - leeway <= now <= exp + leeway``; both bounds are inclusive."""
    moment = current_time(now)
    exp = claims.get(EXPIRATION)
    nbf = claims.get(NOT_BEFORE)
    if exp is not None:
        if not _is_number(exp):
            raise InvalidClaims("'exp' must be a NumericDate", {"claim": EXPIRATION})
        if moment > exp + leeway:
            raise TokenExpired("token has expired", {"seconds_late": moment - exp})
    if nbf is not None:
        if not _is_number(nbf):
            raise InvalidClaims("'nbf' must be a NumericDate", {"claim": NOT_BEFORE})
        if moment < nbf - leeway:
            raise TokenNotYetValid("token is not valid yet", {"seconds_early": nbf - moment})
