from datetime import datetime, timedelta, timezone

import pytest

from sealed_jwt.claims import build_claims, check_time_window, numeric_date, validate_claims
from sealed_jwt.errors import InvalidClaims, TokenExpired, TokenNotYetValid

from .conftest import NOW


def test_validate_returns_copy(claims):
    copied = validate_claims(claims)
    assert copied == claims
    copied["extra"] = 1
    assert "extra" not in claims


@pytest.mark.parametrize(
    "patch",
    [
        {"iss": ""},
        {"sub": 42},
        {"aud": None},
        {"exp": "tomorrow"},
        {"nbf": True},
        {"iat": float("inf")},
        {"iat": 10**400},
        {"exp": -(10**400)},
        {"exp": NOW, "nbf": NOW},
        {"exp": NOW - 1, "nbf": NOW},
        {"blob": object()},
    ],
)
def test_invalid_claims(claims, patch):
    claims.update(patch)
    with pytest.raises(InvalidClaims):
        validate_claims(claims)


def test_invalid_claims_do_not_leak_values():
    with pytest.raises(InvalidClaims) as info:
        validate_claims({"sub": "", "secret": "hunter2"})
    assert "hunter2" not in str(info.value.to_dict())
    assert info.value.details == {"claim": "sub"}


def test_non_mapping_rejected():
    with pytest.raises(InvalidClaims):
        validate_claims([("sub", "x")])


def test_non_string_claim_names_rejected():
    with pytest.raises(InvalidClaims):
        validate_claims({1: "x"})


def test_opaque_claims_pass_through():
    claims = {"res": "*", "fname": "John", "nested": {"a": [1, 2]}}
    assert validate_claims(claims) == claims


def test_numeric_date():
    assert numeric_date(NOW) == NOW
    assert numeric_date(datetime.fromtimestamp(NOW, tz=timezone.utc)) == NOW
    assert numeric_date(datetime.fromtimestamp(NOW, tz=timezone.utc).replace(tzinfo=None)) == NOW
    with pytest.raises(TypeError):
        numeric_date("now")
    with pytest.raises(TypeError):
        numeric_date(10**400)


def test_build_claims_from_lifetime():
    claims = build_claims(
        "john.doe@acme.com",
        issuer="rev-jwt-gen-sample",
        audience="rev",
        lifetime=timedelta(minutes=60),
        now=NOW,
        res="*",
    )
    assert claims == {
        "sub": "john.doe@acme.com",
        "iss": "rev-jwt-gen-sample",
        "aud": "rev",
        "exp": NOW + 3600,
        "res": "*",
    }


def test_build_claims_explicit_dates_win():
    claims = build_claims("u", expiration=NOW + 10, not_before=NOW - 10, lifetime=timedelta(hours=1), now=NOW)
    assert claims["exp"] == NOW + 10
    assert claims["nbf"] == NOW - 10


# -------------------------- time window --------------------------

def test_expiry_boundary():
    check_time_window({"exp": NOW}, NOW)
    with pytest.raises(TokenExpired):
        check_time_window({"exp": NOW - 1}, NOW)


def test_not_before_boundary():
    check_time_window({"nbf": NOW}, NOW)
    with pytest.raises(TokenNotYetValid):
        check_time_window({"nbf": NOW + 1}, NOW)


def test_leeway_widens_window():
    check_time_window({"exp": NOW - 5, "nbf": NOW + 5}, NOW, leeway=5)
    with pytest.raises(TokenExpired):
        check_time_window({"exp": NOW - 6}, NOW, leeway=5)


def test_no_temporal_claims_always_in_window():
    check_time_window({"sub": "x"}, NOW)


@pytest.mark.parametrize("claims", [{"exp": 10**400}, {"nbf": -(10**400)}])
def test_time_window_rejects_out_of_range_dates(claims):
    with pytest.raises(InvalidClaims):
        check_time_window(claims, NOW)
