from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import PLATFORM_FEE, PROCESSING_FEE_RATE, SEAT_PRICE


@dataclass(frozen=True)
class OrderQuote:
    seats: int
    subtotal: int
    platform_fee: int
    processing_fee: int
    total: int

    @property
    def amount_paise(self) -> int:
        return self.total * 100


def quote_seats(seats: int) -> OrderQuote:
    """Price a seat purchase in whole rupees; the processing fee rounds up."""
    subtotal = seats * SEAT_PRICE
    processing_fee = math.ceil((subtotal + PLATFORM_FEE) * PROCESSING_FEE_RATE)
    return OrderQuote(
        seats=seats,
        subtotal=subtotal,
        platform_fee=PLATFORM_FEE,
        processing_fee=processing_fee,
        total=subtotal + PLATFORM_FEE + processing_fee,
    )
