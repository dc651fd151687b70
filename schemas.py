"""
Database Schemas

Pydantic models for the records kept in each collection (and in each JSON
file of the fallback store). Stored documents use camelCase keys; the models
expose snake_case attributes through aliases.

- Doctor -> "doctors"
- Post -> "posts"
- Product -> "products"
- Slide -> "slides"
- Reservation -> "reservations"
- User -> "users"
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ProductCategoryId = Literal["cat", "dog", "bird", "rabbit", "small-pet", "accessory"]
ReservationStatus = Literal["pending", "confirmed", "cancelled"]
Role = Literal["user", "admin"]


def now_iso() -> str:
    """UTC timestamp in the ISO-8601 form stored on every record."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    created_at: str
    updated_at: Optional[str] = None


class Doctor(Record):
    name: str = Field(..., description="Full name")
    specialty: str
    phone: str
    address: str
    province: str
    city: str
    description: Optional[str] = None
    map_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo: Optional[str] = None


class Post(Record):
    title: str
    content: str
    image: Optional[str] = Field(None, description="Image URL")
    published: bool = False


class ProductCategory(BaseModel):
    id: ProductCategoryId
    label: str


class Product(Record):
    name: str
    category_id: ProductCategoryId
    description: str
    image: str = ""
    price: float = Field(..., gt=0)
    stock: int = Field(..., ge=0)
    brand: Optional[str] = None
    highlights: Optional[List[str]] = None
    weight: Optional[str] = None


class Slide(Record):
    title: str
    description: str
    accent: str
    image: str
    cta_label: str
    cta_link: str
    order: int


class Reservation(Record):
    doctor_id: str
    doctor_name: str
    patient_name: str
    phone: str
    preferred_date: str
    preferred_time: Optional[str] = None
    note: Optional[str] = None
    status: ReservationStatus = "pending"


class User(Record):
    email: str = Field(..., description="Lowercased, trimmed email address")
    name: str
    password: str = Field(..., description="BCrypt hashed password")
    role: Role = "user"
