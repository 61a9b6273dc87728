from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

import crud
import models
import schemas
from database import get_db
from exceptions import NotFoundOrNotOwned
from oauth import get_current_user

router = APIRouter(
    prefix="/outfits",
    tags=["Outfits"]
)


@router.get("/", response_model=List[schemas.OutfitDetail])
def get_user_outfits(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return crud.list_outfits_by_user(db, current_user.id)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=schemas.Outfit)
def create_outfit(outfit: schemas.OutfitCreate, db: Session = Depends(get_db),
                  current_user: models.User = Depends(get_current_user)):
    return crud.create_outfit(db, current_user.id, outfit)


@router.delete("/{outfit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_outfit(outfit_id: str, db: Session = Depends(get_db),
                  current_user: models.User = Depends(get_current_user)):
    result = crud.delete_outfit(db, outfit_id, current_user.id)
    if not result.deleted:
        raise NotFoundOrNotOwned("Outfit not found or you do not have permission to delete it.")
    return None
