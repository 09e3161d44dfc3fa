"""Pydantic request/response schemas for the Reviews API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "order_id": "order-001",
                    "rating": 5,
                    "title": "Best cake in town",
                    "comment": "Moist, fresh and delivered on time.",
                }
            ]
        }
    }

    product_id: str
    order_id: str
    rating: int
    title: str | None = None
    comment: str | None = None


# --- Response Schemas ---


class ReviewResponse(BaseModel):
    id: str
    product_id: str
    order_id: str
    account_id: str | None = None
    customer_name: str
    rating: int
    title: str | None = None
    comment: str | None = None
    verified: bool
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            product_id=str(review.product_id),
            order_id=str(review.order_id),
            account_id=str(review.account_id) if review.account_id else None,
            customer_name=review.customer_name,
            rating=review.rating.score,
            title=review.title,
            comment=review.comment,
            verified=review.verified,
            created_at=review.created_at,
        )


class ReviewPageResponse(BaseModel):
    reviews: list[ReviewResponse]
    total: int
    page: int
    limit: int
    pages: int


class ReviewCheckResponse(BaseModel):
    has_reviewed: bool
    review: ReviewResponse | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None
