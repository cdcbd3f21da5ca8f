import hashlib
import hmac


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    """Compare the digest of ``password`` with a stored digest."""
    return hmac.compare_digest(hash_password(password), password_hash or "")
