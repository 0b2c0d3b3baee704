from __future__ import annotations

import sys
import os

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

from app.admin_dashboard import render_admin_dashboard
from app.config import load_config
from app.content import (
    SOURCE_DEFAULTS,
    load_business_settings,
    load_gallery_images,
    load_published_testimonials,
    load_service_packages,
)


def main():
    st.set_page_config(
        page_title="Mobile Detailing Admin",
        page_icon="🚗",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    cfg = load_config()

    with st.sidebar:
        st.title("Navigation")
        menu = st.radio("Go to", ["Content Preview", "Admin Dashboard"])

    if menu == "Content Preview":
        render_content_preview(cfg)
    else:
        render_admin_dashboard(cfg)


def render_content_preview(cfg):
    """What the public site would render right now, including fallbacks."""
    st.title("Published Content")

    results = {
        "Business settings": load_business_settings(cfg.supabase),
        "Service packages": load_service_packages(cfg.supabase),
        "Testimonials": load_published_testimonials(cfg.supabase),
        "Gallery": load_gallery_images(cfg.supabase),
    }
    for label, result in results.items():
        with st.expander(f"{label} ({result.source})"):
            if result.warning:
                st.warning(result.warning)
            elif result.source == SOURCE_DEFAULTS:
                st.info("Supabase not configured, showing built-in defaults.")
            items = result.items if isinstance(result.items, list) else [result.items]
            st.dataframe([vars(item) for item in items], use_container_width=True)


if __name__ == "__main__":
    main()
