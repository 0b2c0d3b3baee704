# app/reviews.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from app.admin_service import AdminService
from app.config import GooglePlacesConfig
from app.defaults import DEFAULT_AVATAR_URL
from app.errors import ConfigurationError, ReviewImportError
from app.logger import get_logger
from db.models import NewTestimonial, TestimonialSource

LOG = get_logger("google-reviews")

PLACES_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"

MIN_RATING = 4
IMPORT_BATCH_LIMIT = 10
MAX_TEXT_LENGTH = 300
IMPORTED_LOCATION = "Google Review"
IMPORTED_ORDER_INDEX = 999


@dataclass
class GoogleReview:
    author_name: str
    rating: int
    text: str
    time: int
    relative_time_description: str = ""
    profile_photo_url: str = ""

    @property
    def external_id(self) -> str:
        # Places does not expose review ids; the unix timestamp is stable per review.
        return str(self.time)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GoogleReview":
        if not isinstance(payload, dict):
            raise ReviewImportError(f"Malformed review entry: {payload!r}")
        try:
            return cls(
                author_name=str(payload["author_name"]),
                rating=int(payload["rating"]),
                text=str(payload.get("text") or ""),
                time=int(payload["time"]),
                relative_time_description=str(payload.get("relative_time_description") or ""),
                profile_photo_url=str(payload.get("profile_photo_url") or ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ReviewImportError(f"Malformed review entry: {e}") from e


@dataclass
class PlaceDetails:
    place_id: str
    name: str
    rating: Optional[float]
    user_ratings_total: int
    reviews: List[GoogleReview]


@dataclass
class ImportResult:
    imported: int
    total: int


class GooglePlacesClient:
    """Reads place details and reviews from the Google Places API."""

    def __init__(
        self,
        api_key: str,
        place_id: str,
        *,
        timeout: int = 20,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key or not place_id:
            raise ConfigurationError("Google Places API key or Place ID not configured")
        self.api_key = api_key
        self.place_id = place_id
        self.timeout = int(timeout)
        self.s = session or requests.Session()

    def _details(self, fields: str) -> Dict[str, Any]:
        params = {"place_id": self.place_id, "fields": fields, "key": self.api_key}
        try:
            r = self.s.get(PLACES_DETAILS_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ReviewImportError(f"Google Places request failed: {e}") from e

        if r.status_code >= 400:
            raise ReviewImportError(f"HTTP error! status: {r.status_code}")
        try:
            data = r.json()
        except ValueError as e:
            raise ReviewImportError("Google Places returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise ReviewImportError("Google Places returned an unexpected payload")
        status = data.get("status")
        if status != "OK":
            message = data.get("error_message") or ""
            raise ReviewImportError(f"Google Places API error: {status} {message}".strip())
        result = data.get("result")
        if not isinstance(result, dict):
            raise ReviewImportError("Google Places response has no result object")
        return result

    def _reviews(self, result: Dict[str, Any]) -> List[GoogleReview]:
        # Places omits the key entirely for a place with no reviews.
        raw = result.get("reviews", [])
        if not isinstance(raw, list):
            raise ReviewImportError("Google Places 'reviews' is not a list")
        return [GoogleReview.from_payload(item) for item in raw]

    def fetch_reviews(self) -> List[GoogleReview]:
        result = self._details("name,rating,reviews,user_ratings_total")
        reviews = self._reviews(result)
        LOG.info("Fetched %d Google review(s) for place %s", len(reviews), self.place_id)
        return reviews

    def fetch_place_details(self) -> PlaceDetails:
        result = self._details("place_id,name,rating,reviews,user_ratings_total")
        rating = result.get("rating")
        return PlaceDetails(
            place_id=str(result.get("place_id") or self.place_id),
            name=str(result.get("name") or ""),
            rating=float(rating) if rating is not None else None,
            user_ratings_total=int(result.get("user_ratings_total") or 0),
            reviews=self._reviews(result),
        )


def truncate_review_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Cut at the last space within max_length and append '...'."""
    if len(text) <= max_length:
        return text
    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."


def review_to_testimonial(review: GoogleReview) -> NewTestimonial:
    return NewTestimonial(
        name=review.author_name,
        location=IMPORTED_LOCATION,
        rating=review.rating,
        text=truncate_review_text(review.text),
        avatar_url=review.profile_photo_url or DEFAULT_AVATAR_URL,
        source=TestimonialSource.GOOGLE,
        external_review_id=review.external_id,
        is_published=False,
        display_date=review.relative_time_description or None,
        order_index=IMPORTED_ORDER_INDEX,
    )


def import_google_reviews(
    service: AdminService,
    cfg: GooglePlacesConfig,
    *,
    client: Optional[GooglePlacesClient] = None,
) -> ImportResult:
    """Stage new 4+ star Google reviews as unpublished testimonials.

    At most IMPORT_BATCH_LIMIT reviews are staged per run, in the order
    the API returned them. ``total`` counts every review the API returned.
    """
    if not cfg.api_key or not cfg.place_id:
        raise ConfigurationError("Google Places API key or Place ID not configured")
    client = client or GooglePlacesClient(cfg.api_key, cfg.place_id, timeout=cfg.timeout)

    reviews = client.fetch_reviews()
    qualifying = [r for r in reviews if r.rating >= MIN_RATING]

    seen = service.list_google_review_ids()
    fresh: List[GoogleReview] = []
    for review in qualifying:
        # the API can repeat a review; keep the first in API order
        if review.external_id in seen:
            continue
        seen.add(review.external_id)
        fresh.append(review)
    batch = [review_to_testimonial(r) for r in fresh[:IMPORT_BATCH_LIMIT]]

    imported = service.insert_testimonials(batch)
    LOG.info(
        "Imported %d new review(s) out of %d total (%d rated %d+, %d already imported)",
        imported,
        len(reviews),
        len(qualifying),
        MIN_RATING,
        len(qualifying) - len(fresh),
    )
    return ImportResult(imported=imported, total=len(reviews))
