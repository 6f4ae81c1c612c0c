from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Numeric, Table
from datetime import datetime
from .db import Base
from sqlalchemy.orm import relationship


class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    role = relationship("Role")
    # profile detail lives and dies with its user
    detail = relationship("UserDetail", back_populates="user", uselist=False, cascade="all, delete-orphan")


class UserDetail(Base):
    __tablename__ = "user_details"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    first_name = Column(String)
    last_name = Column(String)
    phone_number = Column(String)
    address = Column(Text)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="detail")


inventory_categories = Table(
    "inventory_categories",
    Base.metadata,
    Column("inventory_id", Integer, ForeignKey("inventories.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    inventories = relationship("Inventory", secondary=inventory_categories, back_populates="categories")


class Inventory(Base):
    __tablename__ = "inventories"
    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String, unique=True, index=True, nullable=False)
    item_name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Integer, default=0, nullable=False)
    buying_price = Column(Numeric(12, 2), nullable=False)
    selling_price = Column(Numeric(12, 2), nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    categories = relationship("Category", secondary=inventory_categories, back_populates="inventories")

    def category_names(self) -> list:
        """Category names in a stable order for API responses."""
        return sorted(category.name for category in self.categories)
