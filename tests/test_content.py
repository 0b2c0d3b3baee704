from __future__ import annotations

from app.config import SupabaseConfig
from app.content import (
    SOURCE_DEFAULTS,
    SOURCE_SUPABASE,
    load_business_settings,
    load_gallery_images,
    load_published_testimonials,
    load_service_packages,
)
from app.defaults import DEFAULT_SERVICE_PACKAGES, DEFAULT_TESTIMONIALS
from db.database import is_content_store_configured


UNCONFIGURED = SupabaseConfig(url="", key="")
CONFIGURED = SupabaseConfig(url="https://project.supabase.co", key="anon-key")


def test_capability_check() -> None:
    assert not is_content_store_configured(UNCONFIGURED)
    assert not is_content_store_configured(SupabaseConfig(url="https://project.supabase.co", key=""))
    assert is_content_store_configured(CONFIGURED)


def test_unconfigured_store_uses_defaults_quietly() -> None:
    result = load_service_packages(UNCONFIGURED)
    assert result.source == SOURCE_DEFAULTS
    assert result.warning is None
    assert [p.name for p in result.items] == [p.name for p in DEFAULT_SERVICE_PACKAGES]


def test_defaults_are_copies(fake_client) -> None:
    result = load_service_packages(UNCONFIGURED)
    result.items[0].name = "Changed"
    assert DEFAULT_SERVICE_PACKAGES[0].name == "Essential Detail"


def test_stored_rows_win_over_defaults(fake_client) -> None:
    fake_client.tables["service_packages"] = [
        {"id": "p1", "name": "Maintenance Wash", "price": "$59", "order_index": 1},
    ]
    result = load_service_packages(CONFIGURED, client=fake_client)
    assert result.source == SOURCE_SUPABASE
    assert [p.name for p in result.items] == ["Maintenance Wash"]


def test_empty_table_falls_back_with_warning(fake_client) -> None:
    result = load_gallery_images(CONFIGURED, client=fake_client)
    assert result.source == SOURCE_DEFAULTS
    assert result.warning
    assert len(result.items) == 5


def test_store_error_falls_back_with_warning(fake_client) -> None:
    fake_client.fail_on.add(("testimonials", "select"))
    result = load_published_testimonials(CONFIGURED, client=fake_client)
    assert result.source == SOURCE_DEFAULTS
    assert "StorageError" in result.warning
    assert [t.name for t in result.items] == [t.name for t in DEFAULT_TESTIMONIALS]


def test_only_published_testimonials_are_public(fake_client) -> None:
    fake_client.tables["testimonials"] = [
        {"id": "t1", "name": "Shown", "text": "Great", "rating": 5, "source": "manual",
         "is_published": True, "order_index": 1},
        {"id": "t2", "name": "Staged", "text": "Good", "rating": 4, "source": "google",
         "google_review_id": "99", "is_published": False, "order_index": 999},
    ]
    result = load_published_testimonials(CONFIGURED, client=fake_client)
    assert [t.name for t in result.items] == ["Shown"]


def test_business_settings_unconfigured() -> None:
    result = load_business_settings(UNCONFIGURED)
    assert result.source == SOURCE_DEFAULTS
    assert result.items.phone_link == "tel:+19033996021"


def test_empty_business_settings_table_falls_back_with_warning(fake_client) -> None:
    result = load_business_settings(CONFIGURED, client=fake_client)
    assert result.source == SOURCE_DEFAULTS
    assert result.warning
    assert result.items.email == "info@thedetailproz.com"


def test_stored_business_settings_are_used(fake_client) -> None:
    fake_client.tables["business_settings"] = [
        {"id": "default", "phone_number": "9035550100", "phone_formatted": "(903) 555-0100",
         "phone_link": "tel:+19035550100", "email": "owner@thedetailproz.com"},
    ]
    result = load_business_settings(CONFIGURED, client=fake_client)
    assert result.source == SOURCE_SUPABASE
    assert result.warning is None
    assert result.items.phone_number == "9035550100"
