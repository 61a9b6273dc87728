from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

import crud
import models
import oauth
import schemas
from config import settings
from database import get_db

router = APIRouter(prefix="/auth", tags=["Authentications"])


def _token_response(user: models.User, admin_session: bool = False) -> dict:
    return {
        "access_token": oauth.create_session_token(user, admin_session=admin_session),
        "token_type": "bearer",
        "user": user,
    }


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=schemas.Token)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    new_user = crud.register(db, user.name, user.email, user.password)
    return _token_response(new_user)


@router.post("/login", response_model=schemas.Token)
def login(user_creds: schemas.UserLogin, db: Session = Depends(get_db)):
    user = crud.authenticate(db, user_creds.email, user_creds.password)
    return _token_response(user)


@router.get("/me", response_model=schemas.UserOut)
def get_me(current_user: models.User = Depends(oauth.get_current_user)):
    return current_user


@router.post("/admin/register", status_code=status.HTTP_201_CREATED, response_model=schemas.Token)
def register_admin(user: schemas.AdminCreate, db: Session = Depends(get_db)):
    new_admin = crud.register_admin(db, user.name, user.email, user.password,
                                    user.admin_key, settings.admin_registration_key)
    return _token_response(new_admin, admin_session=True)


@router.post("/admin/login", response_model=schemas.Token)
def admin_login(user_creds: schemas.UserLogin, db: Session = Depends(get_db)):
    admin = crud.authenticate_admin(db, user_creds.email, user_creds.password)
    return _token_response(admin, admin_session=True)
