import base64
import hashlib
import hmac
import secrets

from app.core.config import settings

PBKDF2_ITERATIONS = 260_000


def hash_password(plain: str, *, salt: bytes | None = None) -> str:
    # Stored as pbkdf2_sha256$<iterations>$<salt>$<digest>, pepper kept out of the DB.
    salt = salt or secrets.token_bytes(16)
    peppered = (plain + settings.password_pepper.get_secret_value()).encode("utf-8")
    digest = hashlib.pbkdf2_hmac("sha256", peppered, salt, PBKDF2_ITERATIONS)
    return "$".join([
        "pbkdf2_sha256",
        str(PBKDF2_ITERATIONS),
        base64.b64encode(salt).decode("utf-8"),
        base64.b64encode(digest).decode("utf-8"),
    ])


def admin_key_matches(candidate: str | None) -> bool:
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), settings.admin_api_key.encode("utf-8"))
