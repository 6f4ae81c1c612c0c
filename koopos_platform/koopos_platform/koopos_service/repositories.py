"""
Store gateways.

Thin wrappers over the SQLAlchemy session so that workflows depend on named
lookups instead of ad-hoc queries. Gateways only flush; the calling workflow
decides when to commit or roll back.
"""
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from .models import Category, Inventory, Role, User, UserDetail


class Repository:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()


class UserRepository(Repository):
    """Credential store gateway: principal lookups and uniqueness checks."""

    def find_by_username_or_email(self, username: Optional[str], email: Optional[str]) -> Optional[User]:
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None
        return self.db.query(User).filter(or_(*conditions)).order_by(User.id).first()

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def role_exists(self, role_id: int) -> bool:
        return self.db.get(Role, role_id) is not None

    def add_user(self, user: User) -> User:
        self.db.add(user)
        # flush so the profile detail can reference the generated id
        self.db.flush()
        return user

    def add_detail(self, detail: UserDetail) -> UserDetail:
        self.db.add(detail)
        self.db.flush()
        return detail


class CategoryRepository(Repository):
    def exists_by_name(self, name: str) -> bool:
        return self.db.query(Category.id).filter(Category.name == name).first() is not None

    def find_by_names(self, names: Sequence[str]) -> List[Category]:
        if not names:
            return []
        return self.db.query(Category).filter(Category.name.in_(list(names))).all()

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self.db.flush()
        return category


class InventoryRepository(Repository):
    def exists_by_barcode(self, barcode: str) -> bool:
        return self.db.query(Inventory.id).filter(Inventory.barcode == barcode).first() is not None

    def find_by_barcode(self, barcode: str) -> Optional[Inventory]:
        return (
            self.db.query(Inventory)
            .options(selectinload(Inventory.categories))
            .filter(Inventory.barcode == barcode)
            .first()
        )

    def find_page(self, page: int, size: int, with_categories: bool = False) -> Tuple[List[Inventory], int]:
        """
        Fetch one page of inventory rows.

        Args:
            page: 0-based page index
            size: Rows per page

        Returns:
            Tuple of (rows on the page, total number of rows)
        """
        query = self.db.query(Inventory)
        total = query.count()

        if with_categories:
            query = query.options(selectinload(Inventory.categories))
        rows = query.order_by(Inventory.id.asc()).limit(size).offset(page * size).all()
        return rows, total

    def add(self, inventory: Inventory) -> Inventory:
        self.db.add(inventory)
        self.db.flush()
        return inventory
