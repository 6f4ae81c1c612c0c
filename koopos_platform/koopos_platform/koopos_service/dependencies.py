"""
FastAPI dependency wiring: one session per request, services built on top of it.
"""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .auth import PasswordHasher, TokenIssuer, pwd_hasher, token_issuer
from .db import get_db
from .errors import ServiceError, invalid_token
from .models import User
from .repositories import CategoryRepository, InventoryRepository, UserRepository
from .services.category_service import CategoryService
from .services.inventory_service import InventoryService
from .services.user_service import UserService


def get_password_hasher() -> PasswordHasher:
    return pwd_hasher


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_user_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> UserService:
    return UserService(UserRepository(db), hasher, tokens)


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(InventoryRepository(db), CategoryRepository(db))


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(CategoryRepository(db))


def get_current_user(
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> User:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise ServiceError.authentication(invalid_token("Not authenticated"))
    token = authorization.split(" ", 1)[1].strip()

    username = tokens.decode(token)

    user = UserRepository(db).find_by_username(username)
    if not user:
        raise ServiceError.authentication(invalid_token("User not found"))
    return user
