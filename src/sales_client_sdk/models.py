from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_wire_fields(data: Mapping[str, Any], fields: Mapping[str, str]) -> dict[str, Any]:
    """Map both wire naming conventions onto canonical snake_case field names.

    ``fields`` maps each canonical name to its capitalized wire name. The first
    pass reads capitalized keys, the second fills the gaps from snake_case keys.
    A ``None`` value counts as absent in both passes.
    """
    resolved: dict[str, Any] = {}
    for name, capitalized in fields.items():
        value = data.get(capitalized)
        if value is not None:
            resolved[name] = value
    for name in fields:
        if name in resolved:
            continue
        value = data.get(name)
        if value is not None:
            resolved[name] = value
    return resolved


def _coerce_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid ID format: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid ID format: {value!r}") from exc
    raise ValueError(f"Invalid ID format: {value!r}")


class WireModel(BaseModel):
    """Immutable record that accepts capitalized or snake_case wire payloads."""

    model_config = ConfigDict(frozen=True)

    wire_fields: ClassVar[dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def resolve_wire_names(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return resolve_wire_fields(data, cls.wire_fields)
        return data

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]):
        return cls.model_validate(data)

    def to_wire(self, capitalized: bool = False) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        if not capitalized:
            return payload
        return {self.wire_fields[name]: value for name, value in payload.items()}


class Product(WireModel):
    wire_fields: ClassVar[dict[str, str]] = {
        "id": "ID",
        "name": "Name",
        "price": "Price",
        "created_at": "CreatedAt",
        "updated_at": "UpdatedAt",
    }

    id: int
    name: str = ""
    price: float = 0.0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> int:
        return _coerce_id(value)


class Sale(WireModel):
    wire_fields: ClassVar[dict[str, str]] = {
        "id": "ID",
        "user_id": "UserID",
        "product_id": "ProductID",
        "quantity": "Quantity",
        "sold_at": "SoldAt",
    }

    id: int
    user_id: int
    product_id: int
    quantity: int = 0
    sold_at: datetime = Field(default_factory=_utcnow)

    @field_validator("id", "user_id", "product_id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> int:
        return _coerce_id(value)


class User(WireModel):
    wire_fields: ClassVar[dict[str, str]] = {
        "id": "ID",
        "first_name": "FirstName",
        "last_name": "LastName",
        "email": "Email",
        "role": "Role",
        "is_active": "IsActive",
        "created_at": "CreatedAt",
        "updated_at": "UpdatedAt",
        "version": "Version",
    }

    id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: str = "guest"
    is_active: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None
    version: int = 1

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> int:
        return _coerce_id(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ChatResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    response: str = ""
    data: Optional[dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=_utcnow)
    type: str = "text"

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    is_user: bool
    timestamp: datetime = Field(default_factory=_utcnow)
    data: Optional[dict[str, Any]] = None
    type: Optional[str] = None

    @classmethod
    def from_user(cls, text: str) -> "ChatMessage":
        return cls(text=text, is_user=True)

    @classmethod
    def from_response(cls, response: ChatResponse) -> "ChatMessage":
        return cls(
            text=response.response,
            is_user=False,
            timestamp=response.timestamp,
            data=response.data,
            type=response.type,
        )

    @property
    def is_ai_response(self) -> bool:
        return self.type == "ai"

    @property
    def is_data_response(self) -> bool:
        return self.type == "data"

    @property
    def is_help_response(self) -> bool:
        return self.type == "help"

    @property
    def is_permission_denied(self) -> bool:
        return self.type == "permission_denied"

    @property
    def is_fallback(self) -> bool:
        return self.type == "fallback"


class ProductQuery(BaseModel):
    name: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class SaleQuery(BaseModel):
    user_id: Optional[int] = None
    product_id: Optional[int] = None
    min_qty: Optional[int] = None
    max_qty: Optional[int] = None
    min_date: Optional[datetime] = None
    max_date: Optional[datetime] = None


class UserQuery(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_page(self) -> int | None:
        value = self.metadata.get("current_page")
        return int(value) if value is not None else None

    @property
    def total_pages(self) -> int | None:
        value = self.metadata.get("total_pages")
        return int(value) if value is not None else None


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


@dataclass(frozen=True)
class SaleFormOptions:
    users: List[User] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)


_MISSING = object()


def diff_changes(current: Any | None, changes: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the entries of ``changes`` that differ from ``current``.

    Keys the entity does not carry (e.g. ``password``) always count as changed.
    """
    if current is None:
        return dict(changes)
    diff: dict[str, Any] = {}
    for key, value in changes.items():
        existing = getattr(current, key, _MISSING)
        if existing is _MISSING or existing != value:
            diff[key] = value
    return diff
