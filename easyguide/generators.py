# easyguide/generators.py
import re
import secrets
import string
import uuid

REFERRAL_ALPHABET = string.ascii_uppercase + string.digits


def generate_otp(length: int = 6) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(length))


def generate_referral_code(length: int = 16) -> str:
    return "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(length))


def generate_reset_token() -> str:
    return str(uuid.uuid4())


def generate_temporary_password(length: int = 12) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_transaction_uuid(order_id) -> str:
    return f"TSI-TKT-{order_id}"


def slugify(value: str) -> str:
    value = re.sub(r"[^\w\s-]", "", str(value or "")).strip().lower()
    return re.sub(r"[\s_-]+", "-", value)
