"""FastAPI endpoints for the Orders context.

Fixed paths (``/my-orders``, ``/all``, ``/stats``) are declared before
``/{order_id}`` so they are not captured as ids.
"""

from fastapi import APIRouter, Depends, Query

from storefront.identity.account.account import Account
from storefront.identity.api.dependencies import admin_account, current_account, optional_account
from storefront.ordering.api.schemas import (
    CreateOrderRequest,
    OrderPageResponse,
    OrderResponse,
    OrderStatsResponse,
    UpdateStatusRequest,
)
from storefront.ordering.ledger import OrderLedger
from storefront.shared.contact import validate_contact

order_router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_ledger() -> OrderLedger:
    return OrderLedger()


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(
    body: CreateOrderRequest,
    account: Account | None = Depends(optional_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderResponse:
    order = ledger.create(
        customer=body.customer.model_dump(),
        items=[item.model_dump() for item in body.items],
        subtotal=body.subtotal,
        total=body.total,
        delivery_fee=body.delivery_fee,
        payment_status=body.payment_status,
        payment_id=body.payment_id,
        account_id=str(account.id) if account else None,
    )
    return OrderResponse.from_order(order)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    phone: str | None = Query(None, max_length=10),
    account: Account | None = Depends(optional_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> list[OrderResponse]:
    """Signed-in customers see their own orders; guests look theirs up by phone."""
    if account is not None:
        orders = ledger.for_account(str(account.id))
    else:
        validate_contact(phone=phone or "")
        orders = ledger.for_phone(phone)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/my-orders", response_model=list[OrderResponse])
async def my_orders(
    account: Account = Depends(current_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in ledger.for_account(str(account.id))]


@order_router.get("/all", response_model=OrderPageResponse)
async def all_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _admin: Account = Depends(admin_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderPageResponse:
    result = ledger.list_all(status=status, page=page, limit=limit)
    return OrderPageResponse(
        orders=[OrderResponse.from_order(order) for order in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@order_router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(
    _admin: Account = Depends(admin_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderStatsResponse:
    stats = ledger.stats()
    return OrderStatsResponse(
        total_orders=stats.total_orders,
        paid_orders=stats.paid_orders,
        pending_orders=stats.pending_orders,
        delivered_orders=stats.delivered_orders,
        total_revenue=stats.total_revenue,
        recent_orders=[OrderResponse.from_order(order) for order in stats.recent_orders],
    )


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    _admin: Account = Depends(admin_account),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderResponse:
    return OrderResponse.from_order(ledger.update_status(order_id, body.status))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, ledger: OrderLedger = Depends(get_order_ledger)) -> OrderResponse:
    return OrderResponse.from_order(ledger.get(order_id))
