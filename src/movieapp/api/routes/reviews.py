"""Review API endpoints."""

from fastapi import APIRouter, Depends, Query, status

from movieapp.api.deps import get_current_user, get_review_service
from movieapp.models.user import User
from movieapp.schemas import (
    MovieReviewsResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from movieapp.services.review_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ReviewService

router = APIRouter()


@router.get("/movies/{movie_id}/reviews", response_model=MovieReviewsResponse)
async def list_movie_reviews(
    movie_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    reviews: ReviewService = Depends(get_review_service),
) -> MovieReviewsResponse:
    """Reviews for a movie, newest first, with the average over all reviews."""
    result = await reviews.get_movie_reviews(movie_id, page, page_size)
    return MovieReviewsResponse(
        reviews=[ReviewResponse.model_validate(r) for r in result.reviews],
        average_rating=result.average_rating,
    )


@router.post(
    "/movies/{movie_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    movie_id: int,
    payload: ReviewCreate,
    user: User = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    review = await reviews.create_review(user.id, movie_id, payload)
    return ReviewResponse.model_validate(review)


@router.patch("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    user: User = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Update rating and/or content of your own review; omitted fields are kept."""
    review = await reviews.update_review(review_id, user.id, payload)
    return ReviewResponse.model_validate(review)


@router.delete("/reviews/{review_id}", response_model=ReviewResponse)
async def delete_review(
    review_id: str,
    user: User = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Delete your own review and return it."""
    review = await reviews.delete_review(review_id, user.id)
    return ReviewResponse.model_validate(review)


@router.get("/users/{user_id}/reviews", response_model=list[ReviewResponse])
async def list_user_reviews(
    user_id: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    reviews: ReviewService = Depends(get_review_service),
) -> list[ReviewResponse]:
    result = await reviews.get_user_reviews(user_id, page, page_size)
    return [ReviewResponse.model_validate(r) for r in result]
