"""HMAC-SHA256 signing of the caller identity forwarded by the gateway.

Message format:  "{timestamp}:{nonce}:{user_id}"
Headers expected next to X-User-Id:
  X-Request-Timestamp  – unix epoch seconds (str)
  X-Nonce              – uuid4 string
  X-Signature          – HMAC-SHA256 hex digest

Replay protection: ±300 s timestamp window (stateless, no nonce store).
"""
import hashlib
import hmac
import time
from typing import Optional


TIMESTAMP_TOLERANCE_SECONDS = 300


def sign_identity(secret: str, user_id: str, timestamp: str, nonce: str) -> str:
    message = f"{timestamp}:{nonce}:{user_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_identity_signature(
    secret: str,
    user_id: str,
    timestamp: Optional[str],
    nonce: Optional[str],
    signature: Optional[str],
    now: Optional[int] = None,
) -> bool:
    """Return True if the signature matches and the timestamp is fresh.

    Never raises; the middleware turns False into a 401.
    """
    if not (timestamp and nonce and signature):
        return False

    try:
        ts = int(timestamp)
    except ValueError:
        return False

    current = int(time.time()) if now is None else now
    if abs(current - ts) > TIMESTAMP_TOLERANCE_SECONDS:
        return False

    expected = sign_identity(secret, user_id, timestamp, nonce)
    return hmac.compare_digest(expected, signature)
