"""
Utility functions for generating order numbers.
"""

import secrets
import time

from app.core.config import settings


def generate_order_number() -> str:
    """
    Generate an order number in format: ORD-<epoch milliseconds>-XXXX

    Example: ORD-1737460123456-A3F9
    """
    timestamp_ms = int(time.time() * 1000)
    random_part = secrets.token_hex(2).upper()  # 4 character hex string
    return f"{settings.ORDER_NUMBER_PREFIX}-{timestamp_ms}-{random_part}"
