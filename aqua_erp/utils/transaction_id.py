import secrets
import string
from datetime import datetime


def _generate(prefix: str, length: int = 6) -> str:
    now = datetime.now()
    random_part = ''.join(secrets.choice(string.ascii_uppercase + string.digits)
                          for _ in range(length))
    return f"{prefix}-{now.year}-{now.month}-{now.day}-{random_part}"


def generate_transaction_id() -> str:
    """Correlation id shared by all lines of one sale or purchase, e.g. TRANS-2025-3-14-X7K2QA."""
    return _generate("TRANS")


def generate_walking_id() -> str:
    return _generate("WALKING")


def generate_bank_transaction_id() -> str:
    return _generate("BANK-TRANS")
