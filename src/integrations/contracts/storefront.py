from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class View(str, Enum):
    SHOP = "SHOP"
    AUTH = "AUTH"
    USER_ORDERS = "USER_ORDERS"
    ADMIN_DASHBOARD = "ADMIN_DASHBOARD"
    CART = "CART"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"


class FetchStatus(str, Enum):
    SUCCESS = "SUCCESS"
    EMPTY = "EMPTY"
    FAILED = "FAILED"


# ---------------------------------------------------------------------------
# Backend records
# ---------------------------------------------------------------------------

class User(BaseModel):
    id: int
    username: str
    email: Optional[str] = None
    is_admin: bool = False


class Category(BaseModel):
    id: int
    name: str


class Product(BaseModel):
    id: int
    name: str
    description: Optional[str] = ""
    price: Decimal = Decimal("0")
    image_url: Optional[str] = None
    category_id: Optional[int] = None


class CartItem(BaseModel):
    id: int
    product_id: int
    quantity: int = 1


class Order(BaseModel):
    id: int
    user_id: Optional[int] = None
    status: str = OrderStatus.PENDING.value
    total_amount: Decimal = Decimal("0")
    order_date: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING.value


# ---------------------------------------------------------------------------
# Client-side values
# ---------------------------------------------------------------------------

@dataclass
class Notification:
    text: str
    kind: NotificationKind = NotificationKind.INFO


@dataclass
class CartEstimate:
    """Display-only subtotal. The backend computes the real total at checkout."""

    item_count: int
    unit_price: float
    subtotal: float
    label: str = "Subtotal (Mock Est.)"


@dataclass
class FetchResult:
    status: FetchStatus
    data: Any = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, data: Any) -> "FetchResult":
        return cls(status=FetchStatus.SUCCESS, data=data)

    @classmethod
    def empty(cls, error: Optional[Exception] = None) -> "FetchResult":
        return cls(status=FetchStatus.EMPTY, data=[], error=error)

    @classmethod
    def failed(cls, error: Optional[Exception] = None) -> "FetchResult":
        return cls(status=FetchStatus.FAILED, data=None, error=error)

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == FetchStatus.FAILED

    @property
    def value(self) -> Any:
        """Parsed JSON on success, [] when empty, None when failed."""
        if self.status == FetchStatus.EMPTY:
            return []
        return self.data


# ---------------------------------------------------------------------------
# Lenient parsing
# ---------------------------------------------------------------------------

def parse_record(raw: Any, model_type: Type[ModelT]) -> Optional[ModelT]:
    if not isinstance(raw, dict):
        logger.warning("Expected a %s record, got %s", model_type.__name__, type(raw).__name__)
        return None
    try:
        return model_type(**raw)
    except ValidationError as exc:
        logger.warning("Dropping malformed %s record %r: %s", model_type.__name__, raw, exc)
        return None


def parse_records(raw: Any, model_type: Type[ModelT]) -> List[ModelT]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Expected a list of %s records, got %s", model_type.__name__, type(raw).__name__)
        return []
    out: List[ModelT] = []
    for item in raw:
        record = parse_record(item, model_type)
        if record is not None:
            out.append(record)
    return out
