import logging
import re
from pydantic import BaseModel, field_validator
from typing import Optional

logger = logging.getLogger("school_library.schemas")


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


# largest count stored; bigger input counts as unparseable
MAX_COUNT = 2 ** 31 - 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_count(raw, field_name="count") -> int:
    """Parse a copy count from form input.

    Only the leading integer is read ("2.5" -> 2, "1e3" -> 1). Unparseable,
    negative or out-of-range values become 0.
    """
    match = _LEADING_INT.match(str(raw)) if raw is not None else None
    try:
        value = int(match.group(1)) if match else 0
    except ValueError:
        # beyond the interpreter's int string limit
        value = 0
    if value < 0 or value > MAX_COUNT:
        value = 0
    if raw is not None and str(raw).strip() != str(value):
        logger.debug("Clamped %s from %r to %d", field_name, raw, value)
    return value


def parse_price(raw) -> Optional[float]:
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        return None


# -----------------------------
# Listing filters
# -----------------------------
class BookFilters(BaseModel):
    q: Optional[str] = None
    category: Optional[str] = None
    publisher: Optional[str] = None
    availability: Optional[str] = None

    @field_validator('q', 'category', 'publisher', 'availability', mode='before')
    @classmethod
    def strip_blank(cls, v):
        return _blank_to_none(v)


class LoanFilters(BaseModel):
    active_only: bool = False
    title: Optional[str] = None
    borrower: Optional[str] = None

    @field_validator('title', 'borrower', mode='before')
    @classmethod
    def strip_blank(cls, v):
        return _blank_to_none(v)


class BorrowerFilters(BaseModel):
    name: Optional[str] = None
    school_class: Optional[str] = None

    @field_validator('name', 'school_class', mode='before')
    @classmethod
    def strip_blank(cls, v):
        return _blank_to_none(v)


# -----------------------------
# Forms
# -----------------------------
class BookForm(BaseModel):
    isbn: str
    title: str
    description: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    total_copies: int = 0
    available_copies: Optional[int] = None

    @field_validator('description', 'author', 'publisher', 'category', mode='before')
    @classmethod
    def optional_text(cls, v):
        return _blank_to_none(v)

    @field_validator('isbn', 'title', mode='before')
    @classmethod
    def required_text(cls, v):
        return (v or "").strip()

    @field_validator('price', mode='before')
    @classmethod
    def coerce_price(cls, v):
        return parse_price(v)

    @field_validator('total_copies', mode='before')
    @classmethod
    def coerce_total(cls, v):
        return parse_count(v, "total_copies")

    @field_validator('available_copies', mode='before')
    @classmethod
    def coerce_available(cls, v):
        if _blank_to_none(v) is None:
            return None
        return parse_count(v, "available_copies")


class BorrowerForm(BaseModel):
    first_name: str
    last_name: str
    school_class: Optional[str] = None
    email: Optional[str] = None

    @field_validator('first_name', 'last_name', mode='before')
    @classmethod
    def required_text(cls, v):
        return (v or "").strip()

    @field_validator('school_class', 'email', mode='before')
    @classmethod
    def optional_text(cls, v):
        return _blank_to_none(v)


# -----------------------------
# Session identity
# -----------------------------
class CurrentLibrarian(BaseModel):
    id: int
    name: str
