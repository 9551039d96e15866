"""Product domain constants.

The low-stock threshold is a fixed business rule, not configuration:
a product is flagged for replenishment while ``stock_quantity < 5``.
"""

LOW_STOCK_THRESHOLD = 5

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 30

# Storage bounds of the products table.
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2
STOCK_QUANTITY_MAX = 2147483647


def is_low_stock(quantity: int) -> bool:
    return quantity < LOW_STOCK_THRESHOLD


def low_stock_alert(name: str) -> str:
    return f"stock low for {name}"
