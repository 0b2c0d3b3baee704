# app/admin_service.py

from __future__ import annotations

import os
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, TypeVar, Union

from email_validator import validate_email, EmailNotValidError
from supabase import Client

from app.defaults import DEFAULT_BUSINESS_SETTINGS
from app.errors import NotFoundError, StorageError, ValidationError
from app.logger import get_logger
from db.models import (
    BusinessSettings,
    GalleryCategory,
    GalleryImage,
    NewGalleryImage,
    NewServicePackage,
    NewTestimonial,
    NewVehicleSize,
    PackagePricing,
    ServicePackage,
    Testimonial,
    TestimonialSource,
    VehicleSize,
)

LOG = get_logger("admin-service")

R = TypeVar("R")

BUSINESS_SETTINGS = "business_settings"
SERVICE_PACKAGES = "service_packages"
VEHICLE_SIZES = "vehicle_sizes"
PACKAGE_PRICING = "package_pricing"
GALLERY_IMAGES = "gallery_images"
TESTIMONIALS = "testimonials"

GALLERY_PREFIX = "gallery"
PRICING_CONFLICT_KEY = "package_id,vehicle_size_id"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ----------------- VALIDATORS ------------------------

def _require_text(field_name: str, value: Optional[str]) -> str:
    if not value or not str(value).strip():
        raise ValidationError(field_name, "must not be empty")
    return str(value).strip()


def _check_rating(rating: int) -> int:
    if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
        raise ValidationError("rating", "must be an integer between 1 and 5")
    return rating


def _check_price(price: Union[Decimal, int, float, str]) -> Decimal:
    try:
        value = Decimal(str(price))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("price", f"not a number: {price!r}") from exc
    if not value.is_finite() or value < 0:
        raise ValidationError("price", "must be zero or more")
    return value.quantize(Decimal("0.01"))


def _check_category(category: str) -> GalleryCategory:
    try:
        return GalleryCategory(category)
    except ValueError as exc:
        raise ValidationError("category", f"must be one of {[c.value for c in GalleryCategory]}") from exc


def _check_email(email: str) -> str:
    email = _require_text("email", email)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("email", str(exc)) from exc
    return email


def _check_testimonial(item: NewTestimonial) -> None:
    _require_text("name", item.name)
    _check_rating(item.rating)
    try:
        source = TestimonialSource(item.source)
    except ValueError as exc:
        raise ValidationError("source", f"unknown testimonial source {item.source!r}") from exc
    if source is TestimonialSource.GOOGLE:
        # rating-only Google reviews have no text
        _require_text("external_review_id", item.external_review_id)
    elif source is TestimonialSource.MANUAL:
        _require_text("text", item.text)
        if item.external_review_id:
            raise ValidationError("external_review_id", "only Google reviews carry an external id")


class AdminService:
    """Read/write access to the site's Supabase tables.

    Every mutation returns the refreshed collection (not just the touched
    row) so the caller can redraw from one consistent snapshot. Store
    failures surface as StorageError, missing ids as NotFoundError.
    """

    def __init__(self, client: Client, *, bucket: str = "gallery-images") -> None:
        self.client = client
        self.bucket = bucket

    # ---------- helpers ----------
    def _run(self, action: str, query: Any) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as e:
            LOG.error("Error %s: %s", action, e)
            raise StorageError(f"Error {action}: {e}") from e
        return list(response.data or [])

    def _records(self, table: str, rows: List[Dict[str, Any]], parse: Callable[[Dict[str, Any]], R]) -> List[R]:
        try:
            return [parse(r) for r in rows]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            LOG.error("Unreadable row in %s: %s", table, e)
            raise StorageError(f"Unreadable row in '{table}': {e}") from e

    def _update(self, table: str, row_id: str, values: Dict[str, Any]) -> None:
        rows = self._run(f"updating {table}", self.client.table(table).update(values).eq("id", row_id))
        if not rows:
            raise NotFoundError(table, row_id)

    def _delete(self, table: str, row_id: str) -> None:
        rows = self._run(f"deleting from {table}", self.client.table(table).delete().eq("id", row_id))
        if not rows:
            raise NotFoundError(table, row_id)

    # ---------- business settings ----------
    def find_business_settings(self) -> Optional[BusinessSettings]:
        """The stored settings row, or None when the table is still empty."""
        rows = self._run(
            "fetching business settings",
            self.client.table(BUSINESS_SETTINGS).select("*").limit(1),
        )
        if not rows:
            return None
        return self._records(BUSINESS_SETTINGS, rows[:1], BusinessSettings.from_row)[0]

    def get_business_settings(self) -> BusinessSettings:
        settings = self.find_business_settings()
        if settings is None:
            LOG.info("No business settings row yet; using defaults")
            return replace(DEFAULT_BUSINESS_SETTINGS)
        return settings

    def save_business_settings(self, settings: BusinessSettings) -> BusinessSettings:
        _require_text("phone_number", settings.phone_number)
        _check_email(settings.email)
        row = settings.to_row()
        row["id"] = settings.id or "default"
        row["updated_at"] = _now()
        rows = self._run(
            "saving business settings",
            self.client.table(BUSINESS_SETTINGS).upsert(row, on_conflict="id"),
        )
        return self._records(BUSINESS_SETTINGS, rows[:1] or [row], BusinessSettings.from_row)[0]

    # ---------- service packages ----------
    def list_service_packages(self) -> List[ServicePackage]:
        rows = self._run(
            "fetching service packages",
            self.client.table(SERVICE_PACKAGES).select("*").order("order_index"),
        )
        packages = self._records(SERVICE_PACKAGES, rows, ServicePackage.from_row)
        return sorted(packages, key=lambda p: (p.order_index, p.id))

    def create_service_package(self, package: NewServicePackage) -> List[ServicePackage]:
        _require_text("name", package.name)
        row = NewServicePackage.to_row(package)
        row["updated_at"] = _now()
        self._run("adding service package", self.client.table(SERVICE_PACKAGES).insert(row))
        return self.list_service_packages()

    def update_service_package(self, package: ServicePackage) -> List[ServicePackage]:
        _require_text("name", package.name)
        row = package.to_row()
        row["updated_at"] = _now()
        self._update(SERVICE_PACKAGES, package.id, row)
        return self.list_service_packages()

    def delete_service_package(self, package_id: str) -> List[ServicePackage]:
        self._delete(SERVICE_PACKAGES, package_id)
        return self.list_service_packages()

    # ---------- vehicle sizes ----------
    def list_vehicle_sizes(self) -> List[VehicleSize]:
        rows = self._run(
            "fetching vehicle sizes",
            self.client.table(VEHICLE_SIZES).select("*").order("display_order"),
        )
        sizes = self._records(VEHICLE_SIZES, rows, VehicleSize.from_row)
        return sorted(sizes, key=lambda s: (s.display_order, s.id))

    def create_vehicle_size(self, size: NewVehicleSize) -> List[VehicleSize]:
        _require_text("name", size.name)
        self._run("adding vehicle size", self.client.table(VEHICLE_SIZES).insert(NewVehicleSize.to_row(size)))
        return self.list_vehicle_sizes()

    def update_vehicle_size(self, size: VehicleSize) -> List[VehicleSize]:
        _require_text("name", size.name)
        self._update(VEHICLE_SIZES, size.id, size.to_row())
        return self.list_vehicle_sizes()

    def delete_vehicle_size(self, size_id: str) -> List[VehicleSize]:
        self._delete(VEHICLE_SIZES, size_id)
        return self.list_vehicle_sizes()

    # ---------- package pricing ----------
    def list_package_pricing(self, package_id: Optional[str] = None) -> List[PackagePricing]:
        query = self.client.table(PACKAGE_PRICING).select("*")
        if package_id is not None:
            query = query.eq("package_id", package_id)
        rows = self._run("fetching package pricing", query)
        pricing = self._records(PACKAGE_PRICING, rows, PackagePricing.from_row)
        return sorted(pricing, key=lambda p: (p.package_id, p.vehicle_size_id, p.id))

    def upsert_package_pricing(
        self,
        package_id: str,
        vehicle_size_id: str,
        price: Union[Decimal, int, float, str],
    ) -> List[PackagePricing]:
        """Set the price for one (package, vehicle size) pair.

        The table's unique key on the pair makes this a replace when a row
        exists and an insert otherwise.
        """
        _require_text("package_id", package_id)
        _require_text("vehicle_size_id", vehicle_size_id)
        value = _check_price(price)
        row = {
            "package_id": package_id,
            "vehicle_size_id": vehicle_size_id,
            "price": float(value),
            "updated_at": _now(),
        }
        self._run(
            "updating package pricing",
            self.client.table(PACKAGE_PRICING).upsert(row, on_conflict=PRICING_CONFLICT_KEY),
        )
        return self.list_package_pricing()

    def delete_package_pricing(self, pricing_id: str) -> List[PackagePricing]:
        self._delete(PACKAGE_PRICING, pricing_id)
        return self.list_package_pricing()

    # ---------- gallery ----------
    def list_gallery_images(self, category: Optional[GalleryCategory] = None) -> List[GalleryImage]:
        query = self.client.table(GALLERY_IMAGES).select("*")
        if category is not None:
            query = query.eq("category", GalleryCategory(category).value)
        rows = self._run("fetching gallery images", query.order("order_index"))
        images = self._records(GALLERY_IMAGES, rows, GalleryImage.from_row)
        return sorted(images, key=lambda i: (i.order_index, i.id))

    def create_gallery_image(self, image: NewGalleryImage) -> List[GalleryImage]:
        _require_text("url", image.url)
        _require_text("alt_text", image.alt_text)
        _check_category(image.category)
        row = NewGalleryImage.to_row(image)
        row["created_at"] = _now()
        self._run("adding gallery image", self.client.table(GALLERY_IMAGES).insert(row))
        return self.list_gallery_images()

    def update_gallery_image(self, image: GalleryImage) -> List[GalleryImage]:
        _require_text("url", image.url)
        _require_text("alt_text", image.alt_text)
        _check_category(image.category)
        self._update(GALLERY_IMAGES, image.id, image.to_row())
        return self.list_gallery_images()

    def delete_gallery_image(self, image_id: str) -> List[GalleryImage]:
        self._delete(GALLERY_IMAGES, image_id)
        return self.list_gallery_images()

    def delete_gallery_image_with_file(self, image_id: str, storage_path: Optional[str]) -> List[GalleryImage]:
        """Delete the row and, best effort, its uploaded file.

        A failed file removal is logged and leaves an orphaned object behind;
        the row is deleted regardless.
        """
        if storage_path:
            object_key = f"{GALLERY_PREFIX}/{storage_path}"
            try:
                self.client.storage.from_(self.bucket).remove([object_key])
            except Exception as e:
                LOG.warning("Failed to delete %s from storage: %s", object_key, e)
        return self.delete_gallery_image(image_id)

    def upload_gallery_file(self, filename: str, content: bytes, content_type: str) -> Tuple[str, str]:
        """Store an image under gallery/ and return (public_url, storage_path)."""
        _require_text("filename", filename)
        ext = os.path.splitext(filename)[1].lower()
        storage_path = f"{uuid.uuid4().hex}{ext}"
        object_key = f"{GALLERY_PREFIX}/{storage_path}"
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(object_key, content, {"content-type": content_type})
            url = bucket.get_public_url(object_key)
        except Exception as e:
            LOG.error("Error uploading %s: %s", filename, e)
            raise StorageError(f"Error uploading {filename}: {e}") from e
        LOG.info("Uploaded gallery file %s", object_key)
        return url, storage_path

    # ---------- testimonials ----------
    def list_testimonials(self) -> List[Testimonial]:
        rows = self._run(
            "fetching testimonials",
            self.client.table(TESTIMONIALS).select("*").order("order_index"),
        )
        items = self._records(TESTIMONIALS, rows, Testimonial.from_row)
        return sorted(items, key=lambda t: (t.order_index, t.id))

    def list_published_testimonials(self) -> List[Testimonial]:
        rows = self._run(
            "fetching published testimonials",
            self.client.table(TESTIMONIALS).select("*").eq("is_published", True).order("order_index"),
        )
        items = self._records(TESTIMONIALS, rows, Testimonial.from_row)
        return sorted(items, key=lambda t: (t.order_index, t.id))

    def create_testimonial(self, testimonial: NewTestimonial) -> List[Testimonial]:
        _check_testimonial(testimonial)
        self._run("adding testimonial", self.client.table(TESTIMONIALS).insert(self._new_testimonial_row(testimonial)))
        return self.list_testimonials()

    def update_testimonial(self, testimonial: Testimonial) -> List[Testimonial]:
        _check_testimonial(testimonial)
        row = testimonial.to_row()
        row["updated_at"] = _now()
        self._update(TESTIMONIALS, testimonial.id, row)
        return self.list_testimonials()

    def set_testimonial_published(self, testimonial_id: str, published: bool) -> List[Testimonial]:
        self._update(TESTIMONIALS, testimonial_id, {"is_published": bool(published), "updated_at": _now()})
        return self.list_testimonials()

    def delete_testimonial(self, testimonial_id: str) -> List[Testimonial]:
        self._delete(TESTIMONIALS, testimonial_id)
        return self.list_testimonials()

    def list_google_review_ids(self) -> Set[str]:
        rows = self._run(
            "fetching imported review ids",
            self.client.table(TESTIMONIALS).select("google_review_id").eq("source", TestimonialSource.GOOGLE.value),
        )
        return {str(r["google_review_id"]) for r in rows if r.get("google_review_id")}

    def insert_testimonials(self, batch: List[NewTestimonial]) -> int:
        """Bulk insert in one call; returns the number of rows sent."""
        if not batch:
            return 0
        for item in batch:
            _check_testimonial(item)
        rows = [self._new_testimonial_row(item) for item in batch]
        self._run("inserting testimonials", self.client.table(TESTIMONIALS).insert(rows))
        return len(rows)

    @staticmethod
    def _new_testimonial_row(item: NewTestimonial) -> Dict[str, Any]:
        now = _now()
        row = NewTestimonial.to_row(item)
        row["created_at"] = now
        row["updated_at"] = now
        return row
