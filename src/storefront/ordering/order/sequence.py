"""OrderSequence — the counter behind human-readable order numbers.

One row per named sequence holds the last value handed out. It is advanced
inside the same unit of work that persists the order it numbers.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String

from storefront.domain import storefront

ORDER_NUMBER_SEQUENCE = "order-number"


@storefront.aggregate
class OrderSequence:
    name = String(identifier=True, max_length=50)
    last_value = Integer(default=0, min_value=0)

    def advance(self) -> int:
        self.last_value = (self.last_value or 0) + 1
        return self.last_value


def next_value(repo, name: str = ORDER_NUMBER_SEQUENCE) -> int:
    """Fetch-and-increment ``name``; the caller's unit of work persists it."""
    try:
        sequence = repo.get(name)
    except ObjectNotFoundError:
        sequence = OrderSequence(name=name, last_value=0)

    value = sequence.advance()
    repo.add(sequence)
    return value


def format_order_number(value: int) -> str:
    return f"ORD-{value:04d}"
