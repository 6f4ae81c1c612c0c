from decimal import Decimal
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]
# Prices match the Numeric(12, 2) columns and go over the wire as JSON numbers
Price = Annotated[Decimal, Field(gt=0, max_digits=12, decimal_places=2), PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Users
class SignUpRequest(CamelModel):
    username: NonBlankStr
    email: Email
    password: str = Field(min_length=1)
    role: int
    first_name: NonBlankStr
    last_name: NonBlankStr
    phone_number: NonBlankStr
    address: NonBlankStr


class SignInRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def require_username_or_email(self) -> "SignInRequest":
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class SignInResponse(CamelModel):
    model_config = ConfigDict(frozen=True)

    access_token: str


# Categories
class CategoryRequest(CamelModel):
    name: NonBlankStr
    description: Optional[str] = None


# Inventory
class Item(CamelModel):
    barcode: NonBlankStr
    item_name: NonBlankStr
    description: str
    quantity: int = Field(default=0, ge=0)
    buying_price: Price
    selling_price: Price
    categories: Optional[List[str]] = None

    @classmethod
    def from_entity(cls, entity, show_categories: bool = True) -> "Item":
        """Build the DTO for an ``Inventory`` row.

        Categories are only carried when requested and non-empty so that the
        serialized envelope omits the field instead of sending null or [].
        """
        categories = entity.category_names() if show_categories else []
        return cls(
            barcode=entity.barcode,
            item_name=entity.item_name,
            description=entity.description,
            quantity=entity.quantity,
            buying_price=entity.buying_price,
            selling_price=entity.selling_price,
            categories=categories or None,
        )


# ---------------- Response envelope ----------------

class ResponseStatus(CamelModel):
    model_config = ConfigDict(frozen=True)

    response_code: str
    response_message: str


class ErrorDetail(CamelModel):
    model_config = ConfigDict(frozen=True)

    field: Optional[str] = None
    message: str


class RestResponse(CamelModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    response_status: ResponseStatus
    data: Optional[T] = None
    error_details: Optional[List[ErrorDetail]] = None


class PagingMetadata(CamelModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    row_per_page: int = Field(ge=1)
    total_data: int = Field(ge=0)


class PaginatedResponse(CamelModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    response_status: ResponseStatus
    data: List[T] = Field(default_factory=list)
    detail_pages: PagingMetadata
