# db/models.py
"""
Typed records for the Supabase content tables.

Tables created in the Supabase dashboard:

Table: business_settings
- id (text, PK, 'default')
- phone_number, phone_formatted, phone_link, email (text)
- updated_at (timestamp)

Table: service_packages
- id (uuid, PK)
- name (text)
- price (text, legacy price range shown when no per-size price is set)
- popular (bool)
- interior, exterior (text[])
- order_index (int)
- updated_at (timestamp)

Table: vehicle_sizes
- id (uuid, PK)
- name (text)
- display_order (int)

Table: package_pricing
- id (uuid, PK)
- package_id (→ service_packages.id)
- vehicle_size_id (→ vehicle_sizes.id)
- price (numeric)
- updated_at (timestamp)
- UNIQUE (package_id, vehicle_size_id)

Table: gallery_images
- id (uuid, PK)
- url, alt (text)
- category (text: before | after | process)
- order_index (int)
- storage_path (text, nullable)
- created_at (timestamp)

Table: testimonials
- id (uuid, PK)
- name, location, text, image (text)
- rating (int 1..5)
- source (text: google | manual)
- google_review_id (text, nullable, unique among google rows)
- is_published (bool)
- date (text, nullable)
- order_index (int)
- created_at, updated_at (timestamp)

Each entity has a full record (as read back from the table) and a New*
input without the server-assigned id and timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class GalleryCategory(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    PROCESS = "process"


class TestimonialSource(str, Enum):
    GOOGLE = "google"
    MANUAL = "manual"


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


# ---------------------- BUSINESS SETTINGS ----------------------

@dataclass
class BusinessSettings:
    id: str
    phone_number: str
    phone_formatted: str
    phone_link: str
    email: str
    updated_at: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "phone_number": self.phone_number,
            "phone_formatted": self.phone_formatted,
            "phone_link": self.phone_link,
            "email": self.email,
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BusinessSettings":
        return cls(
            id=str(row.get("id") or "default"),
            phone_number=row.get("phone_number") or "",
            phone_formatted=row.get("phone_formatted") or "",
            phone_link=row.get("phone_link") or "",
            email=row.get("email") or "",
            updated_at=row.get("updated_at"),
        )


# ---------------------- SERVICE PACKAGES ----------------------

@dataclass
class NewServicePackage:
    name: str
    legacy_price_range: str = ""
    popular: bool = False
    interior: List[str] = field(default_factory=list)
    exterior: List[str] = field(default_factory=list)
    order_index: int = 0

    def to_row(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": self.legacy_price_range,
            "popular": self.popular,
            "interior": list(self.interior),
            "exterior": list(self.exterior),
            "order_index": self.order_index,
        }


@dataclass
class ServicePackage(NewServicePackage):
    id: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ServicePackage":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            legacy_price_range=row.get("price") or "",
            popular=bool(row.get("popular")),
            interior=list(row.get("interior") or []),
            exterior=list(row.get("exterior") or []),
            order_index=int(row.get("order_index") or 0),
            updated_at=row.get("updated_at"),
        )


# ---------------------- VEHICLE SIZES ----------------------

@dataclass
class NewVehicleSize:
    name: str
    display_order: int = 0

    def to_row(self) -> Dict[str, Any]:
        return {"name": self.name, "display_order": self.display_order}


@dataclass
class VehicleSize(NewVehicleSize):
    id: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "VehicleSize":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            display_order=int(row.get("display_order") or 0),
        )


# ---------------------- PACKAGE PRICING ----------------------

@dataclass
class PackagePricing:
    id: str
    package_id: str
    vehicle_size_id: str
    price: Decimal
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PackagePricing":
        # numeric columns come back as int, float or str depending on the driver
        raw = row.get("price")
        return cls(
            id=str(row["id"]),
            package_id=str(row["package_id"]),
            vehicle_size_id=str(row["vehicle_size_id"]),
            price=Decimal(str(raw)) if raw is not None else Decimal("0"),
            updated_at=row.get("updated_at"),
        )


# ---------------------- GALLERY ----------------------

@dataclass
class NewGalleryImage:
    url: str
    alt_text: str
    category: GalleryCategory = GalleryCategory.PROCESS
    order_index: int = 0
    storage_path: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "alt": self.alt_text,
            "category": GalleryCategory(self.category).value,
            "order_index": self.order_index,
            "storage_path": self.storage_path,
        }


@dataclass
class GalleryImage(NewGalleryImage):
    id: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "GalleryImage":
        return cls(
            id=str(row["id"]),
            url=row.get("url") or "",
            alt_text=row.get("alt") or "",
            category=GalleryCategory(row.get("category") or GalleryCategory.PROCESS.value),
            order_index=int(row.get("order_index") or 0),
            storage_path=row.get("storage_path"),
            created_at=row.get("created_at"),
        )


# ---------------------- TESTIMONIALS ----------------------

@dataclass
class NewTestimonial:
    name: str
    text: str
    rating: int = 5
    location: str = ""
    avatar_url: str = ""
    source: TestimonialSource = TestimonialSource.MANUAL
    external_review_id: Optional[str] = None
    is_published: bool = False
    display_date: Optional[str] = None
    order_index: int = 0

    def to_row(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "location": self.location,
            "rating": self.rating,
            "text": self.text,
            "image": self.avatar_url,
            "source": TestimonialSource(self.source).value,
            "google_review_id": self.external_review_id,
            "is_published": self.is_published,
            "date": self.display_date,
            "order_index": self.order_index,
        }


@dataclass
class Testimonial(NewTestimonial):
    id: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Testimonial":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            location=row.get("location") or "",
            rating=int(row.get("rating") or 0),
            text=row.get("text") or "",
            avatar_url=row.get("image") or "",
            source=TestimonialSource(row.get("source") or TestimonialSource.MANUAL.value),
            external_review_id=_str_or_none(row.get("google_review_id")),
            is_published=bool(row.get("is_published")),
            display_date=row.get("date"),
            order_index=int(row.get("order_index") or 0),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
