from __future__ import annotations

from dataclasses import replace
from typing import List

import streamlit as st
import pandas as pd
import plotly.express as px

from app.admin_service import AdminService
from app.business import settings_from_phone_input
from app.config import AppConfig
from app.defaults import DEFAULT_AVATAR_URL
from app.errors import AdminError
from app.pricing import PriceBook
from app.reviews import import_google_reviews
from db.database import get_supabase_client, is_content_store_configured
from db.models import (
    GalleryCategory,
    NewGalleryImage,
    NewServicePackage,
    NewTestimonial,
    TestimonialSource,
)


def _lines(value: str) -> List[str]:
    return [line.strip() for line in value.splitlines() if line.strip()]


def render_admin_dashboard(cfg: AppConfig):
    st.title("🚗 Detailing Admin Dashboard")

    # --- Password Protection ---
    if not cfg.admin.password:
        st.warning("Set an admin password in secrets ([admin] password) or ADMIN_PASSWORD to enable the dashboard.")
        return
    password = st.sidebar.text_input("Admin Password", type="password")
    if password != cfg.admin.password:
        st.warning("Please enter the correct admin password to manage the site.")
        return

    if not is_content_store_configured(cfg.supabase):
        st.error("Supabase not configured. Please set up your database connection.")
        return

    service = AdminService(get_supabase_client(cfg.supabase), bucket=cfg.supabase.storage_bucket)

    business_tab, packages_tab, gallery_tab, testimonials_tab = st.tabs(
        ["Business Settings", "Service Packages", "Gallery", "Testimonials"]
    )
    with business_tab:
        _run_panel(render_business_settings, service)
    with packages_tab:
        _run_panel(render_service_packages, service)
    with gallery_tab:
        _run_panel(render_gallery, service)
    with testimonials_tab:
        _run_panel(render_testimonials, service, cfg)


def _run_panel(panel, service: AdminService, *args):
    try:
        panel(service, *args)
    except AdminError as e:
        st.error(f"{type(e).__name__}: {e}")


# --- BUSINESS SETTINGS -------------------------------------------------------

def render_business_settings(service: AdminService):
    settings = service.get_business_settings()

    with st.form("business-settings"):
        phone = st.text_input("Phone number", value=settings.phone_number)
        email = st.text_input("Email", value=settings.email)
        saved = st.form_submit_button("Save settings")

    if saved:
        updated = service.save_business_settings(settings_from_phone_input(phone, email, settings.id))
        st.success(f"Saved. Customers will see {updated.phone_formatted} ({updated.phone_link}).")


# --- SERVICE PACKAGES --------------------------------------------------------

def render_service_packages(service: AdminService):
    packages = service.list_service_packages()
    sizes = service.list_vehicle_sizes()
    book = PriceBook(packages, sizes, service.list_package_pricing())

    if packages:
        df = pd.DataFrame(
            [
                {
                    "order": p.order_index,
                    "name": p.name,
                    "popular": p.popular,
                    "legacy price": p.legacy_price_range,
                    "price range": book.price_range_summary(p.id),
                }
                for p in packages
            ]
        )
        st.dataframe(df, use_container_width=True)
    else:
        st.info("No service packages yet.")

    if packages:
        by_label = {f"{p.order_index}. {p.name}": p for p in packages}
        pkg = by_label[st.selectbox("Edit package", list(by_label))]

        with st.form(f"package-{pkg.id}"):
            pkg.name = st.text_input("Name", value=pkg.name)
            pkg.legacy_price_range = st.text_input("Fallback price range", value=pkg.legacy_price_range)
            pkg.popular = st.checkbox("Popular", value=pkg.popular)
            pkg.order_index = int(st.number_input("Order", value=pkg.order_index, step=1))
            interior = st.text_area("Interior features (one per line)", value="\n".join(pkg.interior))
            exterior = st.text_area("Exterior features (one per line)", value="\n".join(pkg.exterior))
            if st.form_submit_button("Save package"):
                pkg.interior = _lines(interior)
                pkg.exterior = _lines(exterior)
                service.update_service_package(pkg)
                st.success(f"Saved {pkg.name}.")
                st.rerun()

        if sizes:
            st.write("#### Price by vehicle size")
            with st.form(f"pricing-{pkg.id}"):
                entered = {
                    size.id: st.number_input(
                        size.name,
                        min_value=0.0,
                        step=1.0,
                        format="%.2f",
                        value=float(book.editable_price(pkg.id, size.id)),
                        key=f"price-{pkg.id}-{size.id}",
                    )
                    for size in sizes
                }
                if st.form_submit_button("Save prices"):
                    for size_id, value in entered.items():
                        service.upsert_package_pricing(pkg.id, size_id, str(value))
                    st.success("Prices saved. A price of 0 shows the fallback range.")
                    st.rerun()
            for size in sizes:
                st.caption(f"{size.name}: {book.resolve_price(pkg.id, size.id)}")

        if st.button("Delete package", key=f"delete-{pkg.id}"):
            service.delete_service_package(pkg.id)
            st.rerun()

    with st.expander("➕ Add package"):
        with st.form("new-package"):
            name = st.text_input("Name")
            price = st.text_input("Fallback price range", placeholder="$89 - $129")
            popular = st.checkbox("Popular")
            interior = st.text_area("Interior features (one per line)")
            exterior = st.text_area("Exterior features (one per line)")
            if st.form_submit_button("Add package"):
                service.create_service_package(
                    NewServicePackage(
                        name=name,
                        legacy_price_range=price,
                        popular=popular,
                        interior=_lines(interior),
                        exterior=_lines(exterior),
                        order_index=len(packages) + 1,
                    )
                )
                st.rerun()


# --- GALLERY -----------------------------------------------------------------

def render_gallery(service: AdminService):
    choice = st.selectbox("Category", ["all"] + [c.value for c in GalleryCategory])
    category = None if choice == "all" else GalleryCategory(choice)
    images = service.list_gallery_images(category)

    for image in images:
        c1, c2 = st.columns([3, 1])
        with c1:
            st.image(image.url, caption=f"{image.alt_text} ({image.category.value})", width=240)
        with c2:
            if st.button("Delete", key=f"delete-image-{image.id}"):
                service.delete_gallery_image_with_file(image.id, image.storage_path)
                st.rerun()
            with st.expander("Edit"):
                with st.form(f"edit-image-{image.id}"):
                    alt = st.text_input("Alt text", value=image.alt_text, key=f"image-alt-{image.id}")
                    categories = [c.value for c in GalleryCategory]
                    category_value = st.selectbox(
                        "Category", categories, index=categories.index(image.category.value), key=f"image-category-{image.id}"
                    )
                    order = st.number_input("Order", min_value=0, value=image.order_index, step=1, key=f"image-order-{image.id}")
                    if st.form_submit_button("Save"):
                        service.update_gallery_image(
                            replace(image, alt_text=alt, category=GalleryCategory(category_value), order_index=int(order))
                        )
                        st.rerun()

    with st.expander("➕ Add image"):
        with st.form("new-image"):
            upload = st.file_uploader("Upload image", type=["png", "jpg", "jpeg", "webp"])
            url = st.text_input("...or image URL")
            alt = st.text_input("Alt text")
            new_category = st.selectbox("Category", [c.value for c in GalleryCategory], key="new-image-category")
            if st.form_submit_button("Add image"):
                storage_path = None
                if upload is not None:
                    url, storage_path = service.upload_gallery_file(upload.name, upload.getvalue(), upload.type)
                service.create_gallery_image(
                    NewGalleryImage(
                        url=url,
                        alt_text=alt,
                        category=GalleryCategory(new_category),
                        order_index=len(images) + 1,
                        storage_path=storage_path,
                    )
                )
                st.rerun()


# --- TESTIMONIALS ------------------------------------------------------------

def render_testimonials(service: AdminService, cfg: AppConfig):
    if st.button("📥 Import Google reviews"):
        with st.spinner("Fetching reviews..."):
            result = import_google_reviews(service, cfg.google_places)
        st.success(f"Imported {result.imported} new reviews out of {result.total} total Google reviews")

    testimonials = service.list_testimonials()
    if not testimonials:
        st.info("No testimonials yet.")
    else:
        df = pd.DataFrame(
            [
                {
                    "name": t.name,
                    "rating": t.rating,
                    "source": t.source.value,
                    "published": t.is_published,
                    "text": t.text,
                }
                for t in testimonials
            ]
        )
        st.plotly_chart(px.histogram(df, x="rating", color="source", nbins=5), use_container_width=True)

        for t in testimonials:
            c1, c2, c3 = st.columns([4, 1, 1])
            with c1:
                badge = "Google" if t.source is TestimonialSource.GOOGLE else "Manual"
                st.markdown(f"**{t.name}** · {'⭐' * t.rating} · {badge}\n\n{t.text}")
                with st.expander("Edit"):
                    with st.form(f"edit-testimonial-{t.id}"):
                        name = st.text_input("Name", value=t.name, key=f"testimonial-name-{t.id}")
                        location = st.text_input("Location", value=t.location, key=f"testimonial-location-{t.id}")
                        rating = st.slider("Rating", 1, 5, t.rating or 5, key=f"testimonial-rating-{t.id}")
                        text = st.text_area("Text", value=t.text, key=f"testimonial-text-{t.id}")
                        order = st.number_input("Order", min_value=0, value=t.order_index, step=1, key=f"testimonial-order-{t.id}")
                        if st.form_submit_button("Save"):
                            service.update_testimonial(
                                replace(t, name=name, location=location, rating=rating, text=text, order_index=int(order))
                            )
                            st.rerun()
            with c2:
                label = "Unpublish" if t.is_published else "Publish"
                if st.button(label, key=f"publish-{t.id}"):
                    service.set_testimonial_published(t.id, not t.is_published)
                    st.rerun()
            with c3:
                if st.button("Delete", key=f"delete-testimonial-{t.id}"):
                    service.delete_testimonial(t.id)
                    st.rerun()

    with st.expander("➕ Add testimonial"):
        with st.form("new-testimonial"):
            name = st.text_input("Name")
            location = st.text_input("Location")
            rating = st.slider("Rating", 1, 5, 5)
            text = st.text_area("Text")
            if st.form_submit_button("Add testimonial"):
                service.create_testimonial(
                    NewTestimonial(
                        name=name,
                        location=location,
                        rating=rating,
                        text=text,
                        avatar_url=DEFAULT_AVATAR_URL,
                        source=TestimonialSource.MANUAL,
                        order_index=len(testimonials) + 1,
                    )
                )
                st.rerun()
