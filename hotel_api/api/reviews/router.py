from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from hotel_api.api.hotels.router import get_hotel_or_404
from hotel_api.api.reviews.models import Review
from hotel_api.api.reviews.schema import ReviewCreate, ReviewUpdate, ReviewRead, ReviewWithHotel
from hotel_api.api.reviews.service import update_average_rating
from hotel_api.api.users.models import User
from hotel_api.database.db import get_db
from hotel_api.utils.advanced_results import advanced_results
from hotel_api.utils.authorization import get_current_user, ensure_owner
from hotel_api.utils.errors import BadRequest, NotFound
from hotel_api.utils.helper import CommonResponse, safe_db_operation
from hotel_api.utils.validators import validate_entity, format_field_errors

router = APIRouter(prefix="/reviews", tags=["Reviews"])
hotel_reviews_router = APIRouter(prefix="/hotels/{hotel_id}/reviews", tags=["Reviews"])

EDITABLE_FIELDS = ["title", "text", "rating"]


def get_review_or_404(db: Session, review_id: int) -> Review:
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise NotFound(f"No review with the id of {review_id}")
    return review


@router.get("", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("GetReviews")
def get_reviews(request: Request, db: Session = Depends(get_db)):
    return advanced_results(db.query(Review), Review, request.query_params, ReviewWithHotel, ["title", "text"])


@hotel_reviews_router.get(
    "",
    response_model=CommonResponse[List[ReviewRead]],
    response_model_exclude_unset=True,
)
@safe_db_operation("GetHotelReviews")
def get_hotel_reviews(hotel_id: int, db: Session = Depends(get_db)):
    reviews = db.query(Review).filter(Review.hotel_id == hotel_id).order_by(Review.id.asc()).all()
    return CommonResponse.response_handler(
        data=[ReviewRead.model_validate(r) for r in reviews],
        count=len(reviews),
    )


@router.get("/{review_id}", response_model=CommonResponse[ReviewWithHotel], response_model_exclude_unset=True)
@safe_db_operation("GetReview")
def get_review(review_id: int, db: Session = Depends(get_db)):
    review = get_review_or_404(db, review_id)
    return CommonResponse.response_handler(data=ReviewWithHotel.model_validate(review))


@hotel_reviews_router.post(
    "",
    response_model=CommonResponse[ReviewRead],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_unset=True,
)
@safe_db_operation("AddReview")
def add_review(
    hotel_id: int,
    review_req: ReviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    hotel = get_hotel_or_404(db, hotel_id)

    review = Review(**review_req.model_dump(), hotel_id=hotel.id, user_id=user.id)
    review.save(db)
    update_average_rating(db, hotel.id)

    return CommonResponse.response_handler(data=ReviewRead.model_validate(review))


@router.put("/{review_id}", response_model=CommonResponse[ReviewRead], response_model_exclude_unset=True)
@safe_db_operation("UpdateReview")
def update_review(
    review_id: int,
    update: ReviewUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    review = get_review_or_404(db, review_id)
    ensure_owner(review.user_id, user, "Not authorized to update review")

    merged = {field: getattr(review, field) for field in EDITABLE_FIELDS}
    merged.update(update.model_dump(exclude_unset=True))
    errors = validate_entity(ReviewCreate, merged)
    if errors:
        raise BadRequest(format_field_errors(errors), errors=errors)

    review.update(db, **ReviewCreate.model_validate(merged).model_dump())
    update_average_rating(db, review.hotel_id)

    return CommonResponse.response_handler(data=ReviewRead.model_validate(review))


@router.delete("/{review_id}", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("DeleteReview")
def delete_review(
    review_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    review = get_review_or_404(db, review_id)
    ensure_owner(review.user_id, user, "Not authorized to delete review")

    hotel_id = review.hotel_id
    review.delete(db)
    update_average_rating(db, hotel_id)

    return CommonResponse.response_handler(data={})
