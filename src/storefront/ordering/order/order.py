"""Order aggregate (CQRS) with the OrderItem entity.

An order is placed in one step: the customer contact details and every line
item are copied onto it, totals are checked, and it starts ``confirmed``
because payment happened upstream.

State Machine (6 states):
    PENDING → CONFIRMED → PREPARING → OUT_FOR_DELIVERY → DELIVERED
    Forward moves may skip states.
    CANCELLED is reachable from any non-terminal state.
    DELIVERED and CANCELLED are terminal.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.contact import contact_errors, normalize_email
from storefront.shared.errors import InvalidTransition

_CENT = Decimal("0.01")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.CONFIRMED: {
        OrderStatus.PREPARING,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PREPARING: {
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

ORDER_STATUSES = tuple(status.value for status in OrderStatus)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line item copied from the catalog at checkout time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)

    @property
    def line_total(self) -> Decimal:
        return Decimal(str(self.price)) * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=20)

    # Customer snapshot, never re-validated against the live account
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=10)
    customer_address = Text(required=True)
    customer_postal_code = String(required=True, max_length=6)
    account_id = Identifier()

    items = HasMany(OrderItem)

    # Pricing, fixed at placement
    subtotal = Float(required=True, min_value=0.0)
    delivery_fee = Float(default=5.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    payment_id = String(max_length=255)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PAID.value)
    status = String(choices=OrderStatus, default=OrderStatus.CONFIRMED.value)

    created_at = DateTime()
    updated_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        customer,
        items,
        subtotal,
        total,
        delivery_fee=5.0,
        payment_status=PaymentStatus.PAID.value,
        payment_id=None,
        account_id=None,
    ):
        """Place an order from a customer snapshot and a list of item dicts.

        ``items`` hold ``product_id``, ``name``, ``price``, ``quantity`` and an
        optional ``image``. Totals are checked here once and never recomputed.
        """
        if not items:
            raise ValidationError({"items": ["No order items"]})

        errors = contact_errors(
            email=customer.get("email"),
            phone=customer.get("phone"),
            postal_code=customer.get("postal_code"),
            field_prefix="customer_",
        )
        if errors:
            raise ValidationError(errors)

        order_items = [
            OrderItem(
                product_id=item.get("product_id"),
                name=item.get("name"),
                price=item.get("price"),
                quantity=item.get("quantity"),
                image=item.get("image"),
            )
            for item in items
        ]
        _check_totals(order_items, subtotal, delivery_fee, total)

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            customer_name=customer.get("name"),
            customer_email=normalize_email(customer.get("email")),
            customer_phone=customer.get("phone"),
            customer_address=customer.get("address"),
            customer_postal_code=customer.get("postal_code"),
            account_id=account_id,
            items=order_items,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=total,
            payment_id=payment_id,
            payment_status=payment_status,
            status=OrderStatus.CONFIRMED.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                account_id=str(account_id) if account_id else None,
                customer_email=order.customer_email,
                item_count=sum(item.quantity for item in order_items),
                total=total,
                payment_status=payment_status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: OrderStatus):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidTransition(f"Cannot move order from {current.value} to {target_status.value}")

    def change_status(self, new_status: str):
        if new_status not in ORDER_STATUSES:
            raise ValidationError({"status": [f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}"]})

        target = OrderStatus(new_status)
        self._assert_can_transition(target)

        now = datetime.now(UTC)
        previous = self.status
        self.status = target.value
        self.updated_at = now
        if target == OrderStatus.DELIVERED:
            self.delivered_at = now
        elif target == OrderStatus.CANCELLED:
            self.cancelled_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def contains_product(self, product_id) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)


def _check_totals(order_items, subtotal, delivery_fee, total):
    expected_subtotal = sum((item.line_total for item in order_items), Decimal("0"))
    if abs(Decimal(str(subtotal)) - expected_subtotal) >= _CENT:
        raise ValidationError({"subtotal": [f"Subtotal must equal the sum of line items ({expected_subtotal:.2f})"]})
    if abs(Decimal(str(total)) - (Decimal(str(subtotal)) + Decimal(str(delivery_fee)))) >= _CENT:
        raise ValidationError({"total": ["Total must equal subtotal plus delivery fee"]})
