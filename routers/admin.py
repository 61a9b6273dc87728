from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import analytics
import crud
import models
import schemas
from database import get_db
from oauth import get_current_admin

router = APIRouter(prefix="/clothing-items/admin", tags=["admin"])


def _users_with_items(db: Session):
    return [(user, crud.list_items_by_user(db, user.id)) for user in crud.list_users(db)]


@router.get("/users-with-items", response_model=List[schemas.UserWithItems])
def get_users_with_items(db: Session = Depends(get_db), admin: models.User = Depends(get_current_admin)):
    result = []
    for user, items in _users_with_items(db):
        entry = schemas.UserOut.model_validate(user).model_dump()
        entry["items"] = [schemas.ClothingItem.model_validate(item) for item in items]
        entry["price_stats"] = analytics.price_stats(items)
        result.append(entry)
    return result


@router.get("/histogram-data", response_model=List[schemas.HistogramBucket])
def get_histogram_data(db: Session = Depends(get_db), admin: models.User = Depends(get_current_admin)):
    return analytics.hourly_histogram(crud.list_all_items(db))


@router.get("/location-data", response_model=List[schemas.UserLocation])
def get_location_data(db: Session = Depends(get_db), admin: models.User = Depends(get_current_admin)):
    return analytics.location_clusters(crud.list_all_items(db), crud.list_users(db))


@router.get("/price-tiers", response_model=List[schemas.UserPriceTiers])
def get_price_tiers(db: Session = Depends(get_db), admin: models.User = Depends(get_current_admin)):
    result = []
    for user, items in _users_with_items(db):
        breakdown = analytics.price_tiers(items)
        result.append(schemas.UserPriceTiers(
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            **breakdown.model_dump(),
        ))
    return result


@router.get("/summary", response_model=schemas.WardrobeSummary)
def get_summary(user_id: Optional[str] = None, db: Session = Depends(get_db),
                admin: models.User = Depends(get_current_admin)):
    return analytics.wardrobe_summary(_users_with_items(db), selected_user_id=user_id)
