# db/database.py

from supabase import create_client, Client
import streamlit as st

from app.config import SupabaseConfig
from app.errors import ConfigurationError


def is_content_store_configured(cfg: SupabaseConfig) -> bool:
    """Single capability check for every reader and writer of the content tables."""
    return cfg.is_configured


def create_supabase_client(cfg: SupabaseConfig) -> Client:
    if not is_content_store_configured(cfg):
        raise ConfigurationError("Supabase URL or key not configured")
    return create_client(cfg.url, cfg.key)


def get_supabase_client(cfg: SupabaseConfig) -> Client:
    """
    Returns a Supabase client cached for the Streamlit session.
    The admin panel writes to every content table, so the configured key
    needs insert/update/delete rights on them.
    """

    if "supabase_client" not in st.session_state:
        st.session_state.supabase_client = create_supabase_client(cfg)

    return st.session_state.supabase_client
