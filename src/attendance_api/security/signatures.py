"""Webhook signature verification for the Slack and Discord bots."""

import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from fastapi import Header, HTTPException, Request, status

from attendance_api.config import get_settings

logger = logging.getLogger(__name__)

# Slack request signing (https://api.slack.com/authentication/verifying-requests-from-slack)
SLACK_SIGNATURE_VERSION = "v0"
SLACK_MAX_REQUEST_AGE = timedelta(minutes=5)


def compute_slack_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Compute the ``v0=`` signature Slack sends for a request.

    Args:
        signing_secret: App signing secret
        timestamp: Value of the X-Slack-Request-Timestamp header
        body: Raw request body

    Returns:
        Signature string in ``v0=<hex>`` form
    """
    base = f"{SLACK_SIGNATURE_VERSION}:{timestamp}:".encode() + body
    digest = hmac.new(signing_secret.encode(), base, hashlib.sha256).hexdigest()
    return f"{SLACK_SIGNATURE_VERSION}={digest}"


def verify_slack_signature(
    signing_secret: str,
    timestamp: str | None,
    body: bytes,
    signature: str | None,
    now: datetime | None = None,
) -> bool:
    """Verify a Slack request signature and its replay window.

    Args:
        signing_secret: App signing secret
        timestamp: X-Slack-Request-Timestamp header
        body: Raw request body
        signature: X-Slack-Signature header
        now: Current time (defaults to UTC now)

    Returns:
        True if valid, False otherwise
    """
    if not signing_secret or not timestamp or not signature:
        return False
    try:
        sent_at = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return False

    now = now or datetime.now(timezone.utc)
    if abs(now - sent_at) > SLACK_MAX_REQUEST_AGE:
        return False

    expected = compute_slack_signature(signing_secret, timestamp, body)
    return hmac.compare_digest(expected, signature)


def verify_discord_signature(
    public_key_hex: str,
    timestamp: str | None,
    body: bytes,
    signature_hex: str | None,
) -> bool:
    """Verify the Ed25519 signature of a Discord interaction.

    Args:
        public_key_hex: Application public key (hex)
        timestamp: X-Signature-Timestamp header
        body: Raw request body
        signature_hex: X-Signature-Ed25519 header

    Returns:
        True if valid, False otherwise
    """
    if not public_key_hex or not timestamp or not signature_hex:
        return False
    try:
        public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))
        public_key.verify(bytes.fromhex(signature_hex), timestamp.encode() + body)
        return True
    except (InvalidSignature, ValueError):
        return False


async def verify_slack_request(
    request: Request,
    x_slack_request_timestamp: Annotated[str | None, Header()] = None,
    x_slack_signature: Annotated[str | None, Header()] = None,
) -> bytes:
    """Dependency that authenticates a Slack request.

    Returns:
        Raw request body

    Raises:
        HTTPException: If the signature is missing, stale or invalid
    """
    body = await request.body()
    settings = get_settings()
    if not verify_slack_signature(
        settings.slack_signing_secret, x_slack_request_timestamp, body, x_slack_signature
    ):
        logger.warning("Rejected Slack request with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid request signature",
        )
    return body


async def verify_discord_request(
    request: Request,
    x_signature_ed25519: Annotated[str | None, Header()] = None,
    x_signature_timestamp: Annotated[str | None, Header()] = None,
) -> bytes:
    """Dependency that authenticates a Discord interaction.

    Returns:
        Raw request body

    Raises:
        HTTPException: If the signature is missing or invalid
    """
    body = await request.body()
    settings = get_settings()
    if not verify_discord_signature(
        settings.discord_public_key, x_signature_timestamp, body, x_signature_ed25519
    ):
        logger.warning("Rejected Discord interaction with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid request signature",
        )
    return body
