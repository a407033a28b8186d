"""Review endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...errors import LunchMapError
from ...schemas.reviews import RatingAggregateModel, ReviewCreateRequest, ReviewModel
from ...services.reviews.rating import RatingAggregator
from ...services.reviews.service import ReviewService
from ..dependencies import get_rating_aggregator, get_review_service
from ..errors import to_http_exception

router = APIRouter(tags=["reviews"])


@router.post("/reviews", response_model=ReviewModel, status_code=status.HTTP_201_CREATED)
def add_review(payload: ReviewCreateRequest, service: ReviewService = Depends(get_review_service)) -> ReviewModel:
    try:
        return ReviewModel.from_domain(service.add_review(payload.to_domain()))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc


@router.put("/reviews/{review_id}", response_model=ReviewModel, status_code=status.HTTP_200_OK)
def update_review(
    review_id: str,
    payload: ReviewCreateRequest,
    service: ReviewService = Depends(get_review_service),
) -> ReviewModel:
    try:
        return ReviewModel.from_domain(service.update_review(payload.to_domain(review_id)))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: str, service: ReviewService = Depends(get_review_service)) -> Response:
    try:
        service.delete_review(review_id)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/restaurants/{restaurant_id}/reviews", response_model=List[ReviewModel], status_code=status.HTTP_200_OK)
def list_reviews(restaurant_id: str, service: ReviewService = Depends(get_review_service)) -> List[ReviewModel]:
    try:
        return [ReviewModel.from_domain(r) for r in service.list_restaurant_reviews(restaurant_id)]
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc


@router.get("/restaurants/{restaurant_id}/rating", response_model=RatingAggregateModel, status_code=status.HTTP_200_OK)
def get_average_rating(restaurant_id: str, service: ReviewService = Depends(get_review_service)) -> RatingAggregateModel:
    try:
        return RatingAggregateModel.from_domain(restaurant_id, service.get_average_rating(restaurant_id))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc


@router.post(
    "/restaurants/{restaurant_id}/rating/recompute",
    response_model=RatingAggregateModel,
    status_code=status.HTTP_200_OK,
)
def recompute_rating(
    restaurant_id: str,
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> RatingAggregateModel:
    """Manually repair a stale aggregate."""
    try:
        return RatingAggregateModel.from_domain(restaurant_id, aggregator.recompute_rating(restaurant_id))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
