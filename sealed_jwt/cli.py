"""
Command line front end.

    sealed-jwt issue  <subject> [--exp N] [--nbf N] [--minutes N] [--video ID | --webcast ID]
    sealed-jwt verify <token|->  [--decrypt PATH] [--verify-key PATH]
    sealed-jwt share  <video id> <token|-> [--url URL]

Paths and claim defaults come from REV_JWT_* environment variables or a
.env file (see sealed_jwt.config).
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import time
from typing import List, Optional
from urllib.parse import quote

from .claims import MAX_NUMERIC_DATE, RESOURCE, build_claims
from .config import Settings, settings
from .errors import KeyLoadError, TokenError
from .issuer import encrypt_token, issue, sign_claims
from .keys import load_key
from .verifier import verify

log = logging.getLogger("sealed_jwt.cli")


class CliError(Exception):
    pass


# ========== Helpers ==========

def read_token_arg(value: str) -> str:
    """'-' means read the token from stdin."""
    if value != "-":
        return value
    return sys.stdin.read().strip()


def epoch_arg(value: Optional[float], name: str) -> Optional[float]:
    """argparse accepts nan and inf as floats; refuse them along with out of range dates."""
    if value is None:
        return None
    if not math.isfinite(value) or abs(value) > MAX_NUMERIC_DATE:
        raise CliError(f"invalid {name} value {value!r}; dates must be epoch seconds")
    return value


def check_time_range(exp: float, nbf: Optional[float], now: int, drift: int) -> None:
    if exp <= now:
        raise CliError(f"expiration in past; dates must be epoch seconds (now = {now})")
    if exp < now + drift:
        log.warning("expiration is less than %d seconds in the future; consider clock drift", drift)
    if nbf is not None:
        if nbf > now:
            log.warning("not before is in the future; token will not be valid until %s",
                        time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(nbf)))
        elif nbf > now - drift:
            log.warning("not before is less than %d seconds in the past; consider clock drift", drift)


def share_url(rev_url: str, video_id: str, token: str) -> str:
    return f"{rev_url.rstrip('/')}/sharevideo/{quote(video_id, safe='')}?videoOnly&jwt_token={quote(token, safe='')}"


# ========== Commands ==========

def cmd_issue(args: argparse.Namespace, cfg: Settings) -> int:
    now = int(time.time())
    nbf = epoch_arg(args.nbf, "not before")
    if args.exp is not None:
        exp = epoch_arg(args.exp, "expiration")
    else:
        exp = epoch_arg(now + args.minutes * 60, "expiration")
    check_time_range(exp, nbf, now, cfg.drift_warning)

    resource = args.video or args.webcast or args.res
    claims = build_claims(
        args.subject,
        issuer=args.iss,
        audience=args.aud,
        expiration=math.floor(exp),
        not_before=math.floor(nbf) if nbf is not None else None,
        **{RESOURCE: resource},
    )
    signing_key = load_key(args.sign, key_id=args.kid, algorithm=args.alg)
    encryption_key = load_key(args.encrypt)
    if args.show_signed:
        signed = sign_claims(signing_key, claims)
        print(signed, file=sys.stderr)
        print(encrypt_token(encryption_key, signed, args.enc))
    else:
        print(issue(signing_key, encryption_key, claims, now, enc=args.enc))
    return 0


def cmd_verify(args: argparse.Namespace, cfg: Settings) -> int:
    token = read_token_arg(args.token)
    decryption_key = load_key(args.decrypt)
    verification_key = load_key(args.verify_key, algorithm=args.alg)
    claims = verify(decryption_key, verification_key, token, leeway=args.leeway)
    print(json.dumps(claims, indent=2, sort_keys=True))
    return 0


def cmd_share(args: argparse.Namespace, cfg: Settings) -> int:
    if not args.url:
        raise CliError("must specify Rev URL using --url or REV_JWT_URL")
    print(share_url(args.url, args.video_id, read_token_arg(args.token)))
    return 0


# ========== Parser ==========

def build_parser(cfg: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sealed-jwt", description="Generate signed and encrypted JWTs for Vbrick Rev")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_issue = sub.add_parser("issue", help="issue a signed + encrypted token")
    p_issue.add_argument("subject", help="sub claim (username or email of Rev user)")
    p_issue.add_argument("--exp", type=float, help="expiration in epoch seconds (default: derive from --minutes)")
    p_issue.add_argument("--nbf", type=float, help="not before in epoch seconds")
    p_issue.add_argument("--minutes", type=float, default=cfg.minutes, help="expiration X minutes in the future")
    target = p_issue.add_mutually_exclusive_group()
    target.add_argument("--video", help="video id (res claim)")
    target.add_argument("--webcast", help="webcast id (res claim)")
    p_issue.add_argument("--res", default=cfg.resource, help="res claim when no video/webcast is given")
    p_issue.add_argument("--iss", default=cfg.issuer)
    p_issue.add_argument("--aud", default=cfg.audience)
    p_issue.add_argument("--sign", default=cfg.signing_key_path, help="signing private key (PEM)")
    p_issue.add_argument("--encrypt", default=cfg.encryption_cert_path, help="encryption public key or certificate (PEM)")
    p_issue.add_argument("--kid", default=cfg.key_id, help="key id placed in the signed header")
    p_issue.add_argument("--alg", default=cfg.signing_algorithm, choices=["RS256", "PS256"])
    p_issue.add_argument("--enc", default=cfg.content_encryption, choices=["A128GCM", "A192GCM", "A256GCM"])
    p_issue.add_argument("--show-signed", action="store_true", help="also print the signed JWT to stderr before encryption")
    p_issue.set_defaults(func=cmd_issue)

    p_verify = sub.add_parser("verify", help="decrypt and verify a token, print its claims")
    p_verify.add_argument("token", help='token, or "-" to read from stdin')
    p_verify.add_argument("--decrypt", default=cfg.decryption_key_path, help="decryption private key (PEM)")
    p_verify.add_argument("--verify-key", default=cfg.signing_cert_path, help="signature public key or certificate (PEM)")
    p_verify.add_argument("--alg", default=cfg.signing_algorithm, choices=["RS256", "PS256"])
    p_verify.add_argument("--leeway", type=int, default=cfg.leeway, help="seconds of clock skew tolerated")
    p_verify.set_defaults(func=cmd_verify)

    p_share = sub.add_parser("share", help="print a share link that authenticates with a token")
    p_share.add_argument("video_id")
    p_share.add_argument("token", help='token, or "-" to read from stdin')
    p_share.add_argument("--url", default=cfg.rev_url, help="Rev URL")
    p_share.set_defaults(func=cmd_share)
    return parser


def main(argv: Optional[List[str]] = None, cfg: Optional[Settings] = None) -> int:
    if cfg is None:
        cfg = settings
    args = build_parser(cfg).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args, cfg)
    except TokenError as e:
        log.error("%s at %s: %s", e.code, e.step, e.message)
    except (KeyLoadError, CliError) as e:
        log.error("%s", e)
    return 1


if __name__ == "__main__":
    sys.exit(main())
