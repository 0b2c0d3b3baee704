"""
Read-only content for the public site.

Design rules:
- Unconfigured Supabase is expected (local preview); built-in defaults are used silently.
- A failed or empty read also falls back to defaults, with a warning attached.
- Admin screens use AdminService directly and see every error.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

from supabase import Client

from app.admin_service import AdminService
from app.config import SupabaseConfig
from app.defaults import (
    DEFAULT_BUSINESS_SETTINGS,
    DEFAULT_GALLERY_IMAGES,
    DEFAULT_SERVICE_PACKAGES,
    DEFAULT_TESTIMONIALS,
)
from app.logger import get_logger
from db.database import create_supabase_client, is_content_store_configured
from db.models import BusinessSettings, GalleryImage, ServicePackage, Testimonial

LOG = get_logger("content")

T = TypeVar("T")

SOURCE_DEFAULTS = "defaults"
SOURCE_SUPABASE = "supabase"


@dataclass(frozen=True)
class ContentResult(Generic[T]):
    items: T
    source: str  # "defaults" | "supabase"
    warning: Optional[str] = None


def _fallback(
    cfg: SupabaseConfig,
    client: Optional[Client],
    fn_live: Callable[[AdminService], Optional[T]],
    default: T,
    what: str,
) -> ContentResult[T]:
    if client is None and not is_content_store_configured(cfg):
        LOG.debug("Supabase not configured, using default %s", what)
        return ContentResult(items=copy.deepcopy(default), source=SOURCE_DEFAULTS)
    try:
        service = AdminService(client or create_supabase_client(cfg), bucket=cfg.storage_bucket)
        items = fn_live(service)
    except Exception as e:
        LOG.warning("Error loading %s, using defaults: %s", what, e)
        return ContentResult(
            items=copy.deepcopy(default),
            source=SOURCE_DEFAULTS,
            warning=f"Fell back to default {what}: {type(e).__name__}",
        )
    if not items:
        return ContentResult(
            items=copy.deepcopy(default),
            source=SOURCE_DEFAULTS,
            warning=f"No {what} stored yet; showing defaults",
        )
    return ContentResult(items=items, source=SOURCE_SUPABASE)


def load_business_settings(cfg: SupabaseConfig, client: Optional[Client] = None) -> ContentResult[BusinessSettings]:
    return _fallback(cfg, client, lambda s: s.find_business_settings(), DEFAULT_BUSINESS_SETTINGS, "business settings")


def load_service_packages(cfg: SupabaseConfig, client: Optional[Client] = None) -> ContentResult[List[ServicePackage]]:
    return _fallback(cfg, client, lambda s: s.list_service_packages(), DEFAULT_SERVICE_PACKAGES, "packages")


def load_published_testimonials(cfg: SupabaseConfig, client: Optional[Client] = None) -> ContentResult[List[Testimonial]]:
    return _fallback(cfg, client, lambda s: s.list_published_testimonials(), DEFAULT_TESTIMONIALS, "testimonials")


def load_gallery_images(cfg: SupabaseConfig, client: Optional[Client] = None) -> ContentResult[List[GalleryImage]]:
    return _fallback(cfg, client, lambda s: s.list_gallery_images(), DEFAULT_GALLERY_IMAGES, "gallery")
