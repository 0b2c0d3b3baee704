from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException


# ---------------------- DATA CLASSES ----------------------

@dataclass
class SupabaseConfig:
    url: str
    key: str
    storage_bucket: str = "gallery-images"

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key)


@dataclass
class GooglePlacesConfig:
    api_key: str
    place_id: str
    timeout: int = 20


@dataclass
class AdminConfig:
    password: str


@dataclass
class AppConfig:
    supabase: SupabaseConfig
    google_places: GooglePlacesConfig
    admin: AdminConfig


# ---------------------- LOADING ----------------------

def _read_streamlit_secrets() -> Mapping[str, Any]:
    # No secrets.toml is a normal local setup; env vars take over.
    try:
        return {key: st.secrets[key] for key in st.secrets}
    except (FileNotFoundError, StreamlitAPIException):
        return {}


def _lookup(secrets: Mapping[str, Any], section: str, key: str, env_name: str, default: str = "") -> str:
    value: Optional[Any] = None
    block = secrets.get(section)
    if isinstance(block, Mapping):
        value = block.get(key)
    if value in (None, ""):
        value = os.getenv(env_name)
    if value is None:
        return default
    return str(value).strip()


def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    if secrets is None:
        secrets = _read_streamlit_secrets()

    # --- Supabase ---
    supabase_cfg = SupabaseConfig(
        url=_lookup(secrets, "supabase", "url", "SUPABASE_URL"),
        key=_lookup(secrets, "supabase", "key", "SUPABASE_KEY"),
        storage_bucket=_lookup(secrets, "supabase", "storage_bucket", "STORAGE_BUCKET", "gallery-images"),
    )

    # --- Google Places ---
    # users often store the timeout as a string, converting to int ensures safety
    timeout_raw = _lookup(secrets, "google_places", "timeout", "GOOGLE_PLACES_TIMEOUT", "20")
    places_cfg = GooglePlacesConfig(
        api_key=_lookup(secrets, "google_places", "api_key", "GOOGLE_PLACES_API_KEY"),
        place_id=_lookup(secrets, "google_places", "place_id", "GOOGLE_PLACE_ID"),
        timeout=int(timeout_raw or 20),
    )

    # --- Admin ---
    admin_cfg = AdminConfig(
        password=_lookup(secrets, "admin", "password", "ADMIN_PASSWORD"),
    )

    return AppConfig(
        supabase=supabase_cfg,
        google_places=places_cfg,
        admin=admin_cfg,
    )
