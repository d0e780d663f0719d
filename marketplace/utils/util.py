import secrets
import uuid
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime

CENTS = Decimal('0.01')


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.utcnow()


def to_money(value):
    """Coerce a price-like value into a two-place Decimal."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value):
    if value is None:
        return None
    return str(to_money(value))


def isoformat(value):
    return value.isoformat() if value else None


def generate_token():
    return secrets.token_urlsafe(32)
