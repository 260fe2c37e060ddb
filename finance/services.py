"""
FINANCE App - Escrow Settlement for Luggage Share

Splits an escrowed order total between the carrier and the platform.

Business rule:
- Platform keeps 40% of the total
- Carrier receives the remainder (total - platform), so the parts always
  sum back to the total exactly
- The platform share is shown to the owner only
"""

import math
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from django.db import transaction

from core.exceptions import ValidationError
from core.identity import viewer_is_owner
from finance.models import Order, OrderStatus, Payout

logger = logging.getLogger(__name__)

PLATFORM_SHARE_RATE = Decimal('0.40')

CENT = Decimal('0.01')


@dataclass(frozen=True)
class EscrowSplit:
    total: Decimal
    carrier_share: Decimal
    platform_share: Decimal


def to_amount(value) -> Decimal:
    """
    Validate a money amount.

    Raises:
        ValidationError: if negative, NaN, infinite or not a number
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Amount must be finite, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Amount must be finite, got {value!r}")
    if amount < 0:
        raise ValidationError(f"Amount cannot be negative, got {value!r}")
    return amount


def settle_escrow(total) -> EscrowSplit:
    """
    Split an escrowed total.

    Args:
        total: non-negative finite order total

    Returns:
        EscrowSplit: carrier_share + platform_share == total
    """
    total = to_amount(total)
    platform = total * PLATFORM_SHARE_RATE
    carrier = total - platform
    return EscrowSplit(total=total, carrier_share=carrier, platform_share=platform)


def present_split(split: EscrowSplit, viewer_is_owner: bool) -> dict:
    """
    Display form of a split.

    Non-owners get the carrier share and the escrow note only; the
    platform share key is absent, not blanked.
    """
    data = {
        'total': split.total,
        'carrier_share': split.carrier_share,
        'escrow_protected': True,
    }
    if viewer_is_owner:
        data['platform_share'] = split.platform_share
    return data


@transaction.atomic
def release_order(order: Order, actor) -> dict:
    """
    Release an escrowed order.

    Records a Payout with cent-rounded shares (the carrier amount is still
    the remainder) and marks the order RELEASED.

    Args:
        order: Order in ESCROW or DELIVERED status
        actor: user requesting the release (decides what is disclosed)

    Returns:
        dict: order reference, new status, presented split and message

    Raises:
        ValidationError: if the order is not releasable
    """
    # Lock the order row for the status transition
    order = Order.objects.select_for_update().get(pk=order.pk)

    if not order.is_releasable:
        raise ValidationError(
            f"Order {order.reference} cannot be released from status {order.status}"
        )

    split = settle_escrow(order.price)
    platform_amount = split.platform_share.quantize(CENT, rounding=ROUND_HALF_UP)
    carrier_amount = split.total - platform_amount

    Payout.objects.create(
        order=order,
        platform_amount=platform_amount,
        carrier_amount=carrier_amount,
    )
    order.status = OrderStatus.RELEASED
    order.save(update_fields=['status'])

    logger.info(
        f"[ESCROW] Released {order.reference} | "
        f"Total: {split.total} | Carrier: {carrier_amount} | Platform: {platform_amount}"
    )

    is_owner = viewer_is_owner(actor)
    if is_owner:
        message = (
            f"Release for {order.reference}: "
            f"Carrier {carrier_amount:.2f}, Platform {platform_amount:.2f}"
        )
    else:
        message = f"Release requested for {order.reference}"

    return {
        'order': order.reference,
        'status': order.status,
        'split': present_split(split, is_owner),
        'message': message,
    }
