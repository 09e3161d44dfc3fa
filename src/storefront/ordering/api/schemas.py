"""Pydantic request/response schemas for the Orders API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CustomerSchema(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    phone: str = Field(..., max_length=10)
    address: str = Field(..., max_length=500)
    postal_code: str = Field(..., max_length=6)


class OrderItemSchema(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    name: str | None = Field(None, max_length=200)
    price: float | None = Field(None, ge=0)
    image: str | None = Field(None, max_length=500)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer": {
                        "name": "Asha Rao",
                        "email": "asha@example.com",
                        "phone": "9876543210",
                        "address": "12 MG Road, Bengaluru",
                        "postal_code": "560001",
                    },
                    "items": [{"product_id": "prod-001", "name": "Red Velvet Cake", "price": 10.0, "quantity": 2}],
                    "subtotal": 20.0,
                    "delivery_fee": 5.0,
                    "total": 25.0,
                    "payment_id": "pi_3Nabc",
                }
            ]
        }
    }

    customer: CustomerSchema
    items: list[OrderItemSchema]
    subtotal: float = Field(..., ge=0)
    delivery_fee: float | None = Field(None, ge=0)
    total: float = Field(..., ge=0)
    payment_status: str | None = None
    payment_id: str | None = Field(None, max_length=255)


class UpdateStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "preparing"}]}}

    status: str


# --- Response Schemas ---


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int
    image: str | None = None


class OrderResponse(BaseModel):
    id: str
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_postal_code: str
    account_id: str | None = None
    items: list[OrderItemResponse]
    subtotal: float
    delivery_fee: float
    total: float
    payment_id: str | None = None
    payment_status: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            customer_address=order.customer_address,
            customer_postal_code=order.customer_postal_code,
            account_id=str(order.account_id) if order.account_id else None,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            total=order.total,
            payment_id=order.payment_id,
            payment_status=order.payment_status,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )


class OrderPageResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    limit: int
    pages: int


class OrderStatsResponse(BaseModel):
    total_orders: int
    paid_orders: int
    pending_orders: int
    delivered_orders: int
    total_revenue: float
    recent_orders: list[OrderResponse]
