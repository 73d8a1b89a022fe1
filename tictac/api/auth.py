"""
Caller identity assertion.

A caller proves an identity by sending it together with
HMAC-SHA256(secret, identity) as a hex signature.
"""

from __future__ import annotations
import hashlib
import hmac
import logging

from ..storage import parse_identity

logger = logging.getLogger(__name__)


def sign_identity(identity: str, secret: str) -> str:
    """Signature a client sends alongside `identity`."""
    return hmac.new(
        secret.encode(),
        parse_identity(identity).encode(),
        hashlib.sha256,
    ).hexdigest()


def verify_caller(
    identity: str | None,
    signature: str | None,
    secret: str,
    debug: bool = False,
) -> str | None:
    """
    Check a claimed identity and return it normalized, or None.

    Without a secret, claims are trusted only in debug mode.
    """
    if not identity:
        return None
    try:
        identity = parse_identity(identity)
    except ValueError:
        logger.warning("Auth: malformed identity %r", identity)
        return None

    if not secret:
        if debug:
            return identity
        logger.warning("Auth: no secret configured, rejecting %s", identity)
        return None

    if not signature:
        logger.warning("Auth: missing signature for %s", identity)
        return None
    expected = sign_identity(identity, secret)
    if not hmac.compare_digest(expected.encode(), signature.lower().encode("utf-8", "replace")):
        logger.warning("Auth: bad signature for %s", identity)
        return None
    return identity
