import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from weblog.db.models.user import User
from weblog.schemas.user import UserCreate, UserLogin, UserOut
from weblog.schemas.token import AuthResponse
from weblog.core.errors import Unauthenticated, ValidationFailed
from weblog.core.security import TokenIssuer, get_token_issuer, hash_password, verify_password
from weblog.crud import users as crud
from weblog.db.session import get_db


router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    if crud.username_or_email_taken(db, user_in.username, user_in.email):
        raise ValidationFailed("User already exists")

    new_user = User(
        username=user_in.username,
        email=user_in.email.lower(),
        password=hash_password(user_in.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same name/email
        db.rollback()
        raise ValidationFailed("User already exists")
    db.refresh(new_user)
    logging.info(f"Registered user {new_user.id} ({new_user.username})")

    return {"user": UserOut.model_validate(new_user), "token": issuer.issue(new_user)}


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = crud.get_by_email(db, credentials.email)
    if not user or not verify_password(credentials.password, user.password):
        raise Unauthenticated("Invalid email or password")

    return {"user": UserOut.model_validate(user), "token": issuer.issue(user)}
