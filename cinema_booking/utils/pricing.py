from decimal import Decimal

from cinema_booking.models.seat import SeatClass

DEFAULT_PRICE = Decimal("12.00")

SEAT_CLASS_PRICES = {
    SeatClass.VIP: Decimal("25.00"),
    SeatClass.PREMIUM: Decimal("18.00"),
    SeatClass.STANDARD: DEFAULT_PRICE,
}


def price_for_seat_class(seat_class) -> Decimal:
    """Static per-seat-class rate. Unknown classes are charged the standard rate."""
    try:
        return SEAT_CLASS_PRICES[SeatClass(seat_class)]
    except ValueError:
        return DEFAULT_PRICE
