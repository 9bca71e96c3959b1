"""Cart total recomputation."""
from decimal import Decimal
from typing import Iterable

from cartstate.logging import get_logger
from cartstate.money import ZERO, to_decimal, to_quantity

from .models import CartItem

logger = get_logger(__name__)


def calculate_total(items: Iterable[CartItem]) -> Decimal:
    """
    Sum price * quantity over all items.

    Malformed price or quantity makes that item contribute 0; nothing raises.
    """
    total = ZERO
    for item in items:
        try:
            total += to_decimal(item.price) * to_quantity(item.quantity)
        except ArithmeticError as e:
            logger.warning("Skipping unpriceable cart item: %s", e)
    return total
