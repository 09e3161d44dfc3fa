"""OrderLedger — order placement, status changes and order queries.

Placement is serialized per process: the lock spans the whole unit of work
that advances the order-number sequence and stores the order, so no two
placements can read the same last value. Notifications go out after the
write commits and never fail the operation that triggered them.
"""

import json
import threading
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.catalog import Catalog
from storefront.config import get_settings
from storefront.notifications.gateway import NotificationGateway
from storefront.ordering.order.order import ORDER_STATUSES, Order, OrderStatus, PaymentStatus
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.shared.errors import NotFound
from storefront.shared.pagination import Page, fetch_all, paginate

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderStats:
    total_orders: int
    paid_orders: int
    pending_orders: int
    delivered_orders: int
    total_revenue: float
    recent_orders: list = field(default_factory=list)


class OrderLedger:
    _placement_lock = threading.Lock()

    def __init__(self, gateway: NotificationGateway | None = None, catalog: Catalog | None = None):
        self.gateway = gateway or NotificationGateway()
        self.catalog = catalog or Catalog()

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def create(
        self,
        customer: dict,
        items: list[dict],
        subtotal,
        total,
        delivery_fee=None,
        payment_status=PaymentStatus.PAID.value,
        payment_id=None,
        account_id=None,
    ) -> Order:
        """Place an order. ``customer`` holds name, email, phone, address and postal_code."""
        if not items:
            raise ValidationError({"items": ["No order items"]})

        command = PlaceOrder(
            customer_name=customer.get("name"),
            customer_email=customer.get("email"),
            customer_phone=customer.get("phone"),
            customer_address=customer.get("address"),
            customer_postal_code=customer.get("postal_code"),
            items=json.dumps(self._complete_line_items(items)),
            subtotal=subtotal,
            delivery_fee=get_settings().default_delivery_fee if delivery_fee is None else delivery_fee,
            total=total,
            payment_status=payment_status or PaymentStatus.PAID.value,
            payment_id=payment_id,
            account_id=account_id,
        )

        with self._placement_lock:
            order_id = current_domain.process(command, asynchronous=False)

        order = self.get(order_id)
        logger.info(
            "order_placed",
            order_id=order_id,
            order_number=order.order_number,
            account_id=str(account_id) if account_id else None,
            total=order.total,
        )

        self.gateway.send_template(order.customer_email, "order_confirmation", _order_context(order))
        return order

    def update_status(self, order_id, new_status) -> Order:
        previous = current_domain.process(
            UpdateOrderStatus(order_id=order_id, status=new_status),
            asynchronous=False,
        )
        order = self.get(order_id)
        logger.info(
            "order_status_changed",
            order_id=str(order_id),
            order_number=order.order_number,
            previous_status=previous,
            new_status=order.status,
        )

        if order.status == OrderStatus.DELIVERED.value:
            self.gateway.send_template(order.customer_email, "order_delivered", _order_context(order))
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get(self, order_id) -> Order:
        try:
            return current_domain.repository_for(Order).get(order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

    def for_account(self, account_id) -> list[Order]:
        return fetch_all(_orders().filter(account_id=str(account_id)).order_by("-created_at"))

    def for_phone(self, phone) -> list[Order]:
        """Guest lookup: every order placed with this phone number."""
        return fetch_all(_orders().filter(customer_phone=phone).order_by("-created_at"))

    def list_all(self, status=None, page: int = 1, limit: int = 20) -> Page:
        queryset = _orders()
        if status:
            if status not in ORDER_STATUSES:
                raise ValidationError({"status": [f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}"]})
            queryset = queryset.filter(status=status)
        return paginate(queryset.order_by("-created_at"), page=page, limit=limit)

    def stats(self, recent: int | None = None) -> OrderStats:
        recent = get_settings().recent_orders_limit if recent is None else recent
        orders = fetch_all(_orders().order_by("-created_at"))

        paid = [order for order in orders if order.payment_status == PaymentStatus.PAID.value]
        return OrderStats(
            total_orders=len(orders),
            paid_orders=len(paid),
            pending_orders=sum(1 for order in orders if order.status == OrderStatus.PENDING.value),
            delivered_orders=sum(1 for order in orders if order.status == OrderStatus.DELIVERED.value),
            total_revenue=round(sum(order.total for order in paid), 2),
            recent_orders=orders[:recent],
        )

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _complete_line_items(self, items: list[dict]) -> list[dict]:
        """Fill missing name, price and image from the catalog's current snapshot."""
        completed = []
        for item in items:
            product_id = item.get("product_id")
            if not product_id:
                raise ValidationError({"items": ["Every item needs a product_id"]})

            line = {
                "product_id": str(product_id),
                "name": item.get("name"),
                "price": item.get("price"),
                "quantity": item.get("quantity"),
                "image": item.get("image"),
            }
            if line["name"] is None or line["price"] is None or line["image"] is None:
                snapshot = self.catalog.get_line_item_snapshot(product_id)
                if snapshot is None and (line["name"] is None or line["price"] is None):
                    raise ValidationError({"items": [f"Product {product_id} not found"]})
                if snapshot is not None:
                    line["name"] = line["name"] if line["name"] is not None else snapshot.name
                    line["price"] = line["price"] if line["price"] is not None else snapshot.price
                    line["image"] = line["image"] if line["image"] is not None else snapshot.image
            completed.append(line)
        return completed


def _orders():
    return current_domain.repository_for(Order)._dao.query


def _order_context(order: Order) -> dict:
    return {
        "order_number": order.order_number,
        "customer_name": order.customer_name,
        "customer_address": order.customer_address,
        "customer_postal_code": order.customer_postal_code,
        "status": order.status,
        "items": [{"name": item.name, "price": item.price, "quantity": item.quantity} for item in order.items],
        "subtotal": order.subtotal,
        "delivery_fee": order.delivery_fee,
        "total": order.total,
    }
