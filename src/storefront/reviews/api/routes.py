"""FastAPI endpoints for verified reviews."""

from fastapi import APIRouter, Depends, Query

from storefront.identity.account.account import Account
from storefront.identity.api.dependencies import optional_account
from storefront.reviews.api.schemas import (
    ReviewCheckResponse,
    ReviewPageResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
)
from storefront.reviews.engine import ReviewIntegrityEngine

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_review_engine() -> ReviewIntegrityEngine:
    return ReviewIntegrityEngine()


@review_router.post("", status_code=201, response_model=ReviewResponse)
async def submit_review(
    body: SubmitReviewRequest,
    account: Account | None = Depends(optional_account),
    engine: ReviewIntegrityEngine = Depends(get_review_engine),
) -> ReviewResponse:
    review = engine.submit(
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        account_id=str(account.id) if account else None,
    )
    return ReviewResponse.from_review(review)


@review_router.get("/product/{product_id}", response_model=ReviewPageResponse)
async def product_reviews(
    product_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    engine: ReviewIntegrityEngine = Depends(get_review_engine),
) -> ReviewPageResponse:
    result = engine.for_product(product_id, page=page, limit=limit)
    return ReviewPageResponse(
        reviews=[ReviewResponse.from_review(review) for review in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@review_router.get("/check/{order_id}/{product_id}", response_model=ReviewCheckResponse)
async def check_review(
    order_id: str,
    product_id: str,
    engine: ReviewIntegrityEngine = Depends(get_review_engine),
) -> ReviewCheckResponse:
    review = engine.check(order_id, product_id)
    return ReviewCheckResponse(
        has_reviewed=review is not None,
        review=ReviewResponse.from_review(review) if review else None,
    )


@review_router.get("/order/{order_id}", response_model=dict[str, ReviewResponse])
async def order_reviews(
    order_id: str,
    engine: ReviewIntegrityEngine = Depends(get_review_engine),
) -> dict[str, ReviewResponse]:
    return {product_id: ReviewResponse.from_review(review) for product_id, review in engine.for_order(order_id).items()}


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(
    review_id: str,
    account: Account | None = Depends(optional_account),
    engine: ReviewIntegrityEngine = Depends(get_review_engine),
) -> StatusResponse:
    engine.delete(review_id, requester_account_id=str(account.id) if account else None)
    return StatusResponse(message="Review deleted")
