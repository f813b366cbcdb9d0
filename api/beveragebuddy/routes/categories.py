from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List
from ..models import Category
from ..schemas.category import CategoryCreate, CategoryRead, CategoryUpdate, CategoryWithReviewCount
from ..database import get_session
from ..services.categories import CategoryService
from ..services.reviews import ReviewService

router = APIRouter()

def _get_or_404(service: CategoryService, category_id: int) -> Category:
    category = service.get(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return category

@router.get("/", response_model=List[CategoryWithReviewCount])
def find_categories(
    filter_text: str = Query("", alias="filter"),
    db: Session = Depends(get_session)
):
    return CategoryService(db).find_with_review_counts(filter_text)

@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: int, db: Session = Depends(get_session)):
    return _get_or_404(CategoryService(db), category_id)

@router.get("/{category_id}/review-count")
def get_review_count(category_id: int, db: Session = Depends(get_session)):
    total = ReviewService(db).get_total_count_for_reviews_in_category(category_id)
    return {"category_id": category_id, "review_count": total}

@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_session)):
    service = CategoryService(db)
    if service.exists_with_name(category.name):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category '{category.name}' already exists"
        )
    return service.save(Category(**category.model_dump()))

@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    category_update: CategoryUpdate,
    db: Session = Depends(get_session)
):
    service = CategoryService(db)
    db_category = _get_or_404(service, category_id)

    update_data = category_update.model_dump(exclude_unset=True)
    name = update_data.get("name")
    if name is not None:
        existing = service.get_by_name(name)
        if existing and existing.id != category_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Category '{name}' already exists"
            )

    draft = Category(id=db_category.id, name=db_category.name)
    for field, value in update_data.items():
        setattr(draft, field, value)

    return service.save(draft)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_session)):
    CategoryService(db).delete(category_id)
    return None
