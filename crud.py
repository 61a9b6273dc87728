"""Domain operations over users, clothing items and outfits.

Each function receives the session it works in; nothing here holds global
state.
"""

import enum
import logging
import secrets
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

import models
import schemas
import utils
from exceptions import DuplicateEmail, Forbidden, InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MIN_ADMIN_PASSWORD_LENGTH = 8


class DeleteResult(enum.Enum):
    DELETED = "deleted"
    NOT_FOUND_OR_NOT_OWNED = "not_found_or_not_owned"

    @property
    def deleted(self) -> bool:
        return self is DeleteResult.DELETED


# ---- Users ----

def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def list_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.created_at).all()


def register(db: Session, name: str, email: str, password: str, is_admin: bool = False) -> models.User:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if get_user_by_email(db, email):
        raise DuplicateEmail()

    new_user = models.User(name=name, email=email, password=utils.hash(password), is_admin=is_admin)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise DuplicateEmail()
    db.refresh(new_user)
    logger.info("Registered %s %s", "admin" if is_admin else "user", new_user.id)
    return new_user


def register_admin(db: Session, name: str, email: str, password: str, admin_key: str,
                   expected_key: str) -> models.User:
    # The key is checked first so a wrong key is always Forbidden.
    if not secrets.compare_digest(admin_key.encode(), expected_key.encode()):
        logger.warning("Admin registration rejected: invalid admin key")
        raise Forbidden("Invalid admin registration key.")
    if len(password) < MIN_ADMIN_PASSWORD_LENGTH:
        raise ValidationError(f"Admin password must be at least {MIN_ADMIN_PASSWORD_LENGTH} characters long.")
    return register(db, name, email, password, is_admin=True)


def authenticate(db: Session, email: str, password: str) -> models.User:
    user = get_user_by_email(db, email)
    if not user or not utils.verify(password, user.password):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()
    return user


def authenticate_admin(db: Session, email: str, password: str) -> models.User:
    user = get_user_by_email(db, email)
    if not user:
        logger.warning("Failed admin login attempt")
        raise InvalidCredentials()
    if not user.is_admin:
        logger.warning("Admin login refused for non-admin user %s", user.id)
        raise Forbidden("Access denied. User is not an administrator.")
    if not utils.verify(password, user.password):
        logger.warning("Failed admin login attempt for user %s", user.id)
        raise InvalidCredentials()
    return user


# ---- Clothing items ----

def create_item(db: Session, user_id: str, item: schemas.ClothingItemCreate, image_path: str,
                exif_data: Optional[schemas.ExifData] = None) -> models.ClothingItem:
    exif_data = exif_data or schemas.ExifData()
    new_item = models.ClothingItem(
        user_id=user_id,
        image_path=image_path,
        **item.model_dump(),
        **exif_data.model_dump(),
    )
    db.add(new_item)
    db.commit()
    db.refresh(new_item)
    logger.info("User %s added clothing item %s", user_id, new_item.id)
    return new_item


def list_items_by_user(db: Session, user_id: str) -> List[models.ClothingItem]:
    return (
        db.query(models.ClothingItem)
        .filter(models.ClothingItem.user_id == user_id)
        .order_by(models.ClothingItem.created_at.desc())
        .all()
    )


def list_all_items(db: Session) -> List[models.ClothingItem]:
    return db.query(models.ClothingItem).order_by(models.ClothingItem.created_at.desc()).all()


def get_item(db: Session, item_id: str) -> Optional[models.ClothingItem]:
    return db.query(models.ClothingItem).filter(models.ClothingItem.id == item_id).first()


def delete_item(db: Session, item_id: str, user_id: str) -> DeleteResult:
    deleted = db.query(models.ClothingItem).filter(
        models.ClothingItem.id == item_id,
        models.ClothingItem.user_id == user_id,
    ).delete(synchronize_session=False)
    # Outfits pointing at the item keep existing; the store nulls the slot.
    db.commit()
    return DeleteResult.DELETED if deleted else DeleteResult.NOT_FOUND_OR_NOT_OWNED


# ---- Outfits ----

def create_outfit(db: Session, user_id: str, outfit: schemas.OutfitCreate) -> models.Outfit:
    if not outfit.name:
        raise ValidationError("Outfit name is required.")
    new_outfit = models.Outfit(
        user_id=user_id,
        name=outfit.name,
        top_id=outfit.top_id,
        bottom_id=outfit.bottom_id,
        shoes_id=outfit.shoes_id,
    )
    db.add(new_outfit)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("One or more clothing items not found.")
    db.refresh(new_outfit)
    logger.info("User %s created outfit %s", user_id, new_outfit.id)
    return new_outfit


def list_outfits_by_user(db: Session, user_id: str) -> List[schemas.OutfitDetail]:
    top = aliased(models.ClothingItem)
    bottom = aliased(models.ClothingItem)
    shoes = aliased(models.ClothingItem)
    rows = (
        db.query(
            models.Outfit,
            top.brand, top.image_path, top.category,
            bottom.brand, bottom.image_path, bottom.category,
            shoes.brand, shoes.image_path, shoes.category,
        )
        .outerjoin(top, models.Outfit.top_id == top.id)
        .outerjoin(bottom, models.Outfit.bottom_id == bottom.id)
        .outerjoin(shoes, models.Outfit.shoes_id == shoes.id)
        .filter(models.Outfit.user_id == user_id)
        .order_by(models.Outfit.created_at.desc())
        .all()
    )

    outfits = []
    for outfit, *joined in rows:
        detail = schemas.OutfitDetail.model_validate(outfit)
        (detail.top_brand, detail.top_image, detail.top_category,
         detail.bottom_brand, detail.bottom_image, detail.bottom_category,
         detail.shoes_brand, detail.shoes_image, detail.shoes_category) = joined
        outfits.append(detail)
    return outfits


def delete_outfit(db: Session, outfit_id: str, user_id: str) -> DeleteResult:
    deleted = db.query(models.Outfit).filter(
        models.Outfit.id == outfit_id,
        models.Outfit.user_id == user_id,
    ).delete(synchronize_session=False)
    db.commit()
    return DeleteResult.DELETED if deleted else DeleteResult.NOT_FOUND_OR_NOT_OWNED
