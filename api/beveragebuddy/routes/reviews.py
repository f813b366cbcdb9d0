from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List
from ..models import Review
from ..schemas.review import ReviewCreate, ReviewRead, ReviewUpdate, ReviewWithCategory
from ..database import get_session
from ..services.reviews import ReviewService

router = APIRouter()

@router.get("/", response_model=List[ReviewWithCategory])
def find_reviews(
    filter_text: str = Query("", alias="filter"),
    db: Session = Depends(get_session)
):
    return ReviewService(db).find_reviews(filter_text)

@router.get("/{review_id}", response_model=ReviewRead)
def get_review(review_id: int, db: Session = Depends(get_session)):
    review = ReviewService(db).get(review_id)
    if not review:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review not found"
        )
    return review

@router.post("/", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
def create_review(review: ReviewCreate, db: Session = Depends(get_session)):
    return ReviewService(db).save(Review(**review.model_dump()))

@router.put("/{review_id}", response_model=ReviewRead)
def update_review(
    review_id: int,
    review_update: ReviewUpdate,
    db: Session = Depends(get_session)
):
    service = ReviewService(db)
    db_review = service.get(review_id)
    if not db_review:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review not found"
        )

    # Edit a copy so a rejected update leaves the loaded review untouched
    draft = db_review.copy()
    for field, value in review_update.model_dump(exclude_unset=True).items():
        setattr(draft, field, value)

    return service.save(draft)

@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: int, db: Session = Depends(get_session)):
    ReviewService(db).delete(review_id)
    return None
