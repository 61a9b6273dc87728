import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

import crud
import models
import oauth
import schemas
from config import settings
from database import get_db
from exceptions import NotFoundOrNotOwned, ValidationError
from exif import extract_exif
from utils import save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clothing-items", tags=["clothing items"])


@router.get("/", response_model=List[schemas.ClothingItem])
def get_user_items(db: Session = Depends(get_db), current_user: models.User = Depends(oauth.get_current_user)):
    return crud.list_items_by_user(db, current_user.id)


@router.post("/", response_model=schemas.ClothingItem, status_code=status.HTTP_201_CREATED)
def create_item(
        brand: str = Form(""),
        price: str = Form(""),
        season: str = Form(""),
        size: str = Form(""),
        category: str = Form(""),
        image: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db),
        current_user: models.User = Depends(oauth.get_current_user)
):
    if image is None or not image.filename:
        raise ValidationError("No image file provided.")
    item = schemas.ClothingItemCreate(brand=brand, price=price, season=season, size=size, category=category)

    filename = save_upload_file(image, settings.upload_dir, settings.max_upload_size, prefix="image")
    image_path = os.path.join(settings.upload_dir, filename)
    exif_data = extract_exif(image_path)
    try:
        return crud.create_item(db, current_user.id, item, filename, exif_data)
    except Exception:
        # No row will reference the photo, so it goes too.
        logger.exception("Could not save clothing item for user %s", current_user.id)
        os.remove(image_path)
        raise


@router.get("/{item_id}", response_model=schemas.ClothingItem)
def get_item(item_id: str, db: Session = Depends(get_db),
             current_user: models.User = Depends(oauth.get_current_user)):
    item = crud.get_item(db, item_id)
    if not item:
        raise NotFoundOrNotOwned("Clothing item not found.")
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: str, db: Session = Depends(get_db),
                current_user: models.User = Depends(oauth.get_current_user)):
    result = crud.delete_item(db, item_id, current_user.id)
    if not result.deleted:
        raise NotFoundOrNotOwned("Clothing item not found or you do not have permission to delete it.")
    return None
