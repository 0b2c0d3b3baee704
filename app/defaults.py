# app/defaults.py
"""Built-in content shown when Supabase is unconfigured, unreachable or empty."""

from __future__ import annotations

from typing import List

from db.models import (
    BusinessSettings,
    GalleryCategory,
    GalleryImage,
    ServicePackage,
    Testimonial,
    TestimonialSource,
)

DEFAULT_AVATAR_URL = "/assets/customer_avatar_2.png"

DEFAULT_BUSINESS_SETTINGS = BusinessSettings(
    id="default",
    phone_number="9033996021",
    phone_formatted="(903) 399-6021",
    phone_link="tel:+19033996021",
    email="info@thedetailproz.com",
)

DEFAULT_SERVICE_PACKAGES: List[ServicePackage] = [
    ServicePackage(
        id="1",
        name="Essential Detail",
        legacy_price_range="$89 - $129",
        popular=False,
        interior=[
            "Vacuum all seats, carpets, and floor mats",
            "Wipe down all interior surfaces",
            "Clean and condition leather/vinyl seats",
            "Clean interior windows and mirrors",
            "Dashboard and console cleaning",
            "Door panel cleaning",
        ],
        exterior=[
            "Hand wash and dry exterior",
            "Wheel and tire cleaning",
            "Exterior window cleaning",
            "Chrome and trim polishing",
            "Basic paint protection spray",
        ],
        order_index=1,
    ),
    ServicePackage(
        id="2",
        name="Premium Detail",
        legacy_price_range="$149 - $199",
        popular=True,
        interior=[
            "Everything in Essential Detail",
            "Deep carpet and upholstery cleaning",
            "Leather conditioning and protection",
            "Air vent cleaning and sanitizing",
            "Cup holder and console deep clean",
            "Interior UV protection treatment",
        ],
        exterior=[
            "Everything in Essential Detail",
            "Clay bar paint decontamination",
            "Paint correction (light scratches)",
            "Premium wax application",
            "Tire shine and dressing",
            "Headlight restoration (if needed)",
        ],
        order_index=2,
    ),
    ServicePackage(
        id="3",
        name="Luxury Detail",
        legacy_price_range="$249 - $349",
        popular=False,
        interior=[
            "Everything in Premium Detail",
            "Steam cleaning of all surfaces",
            "Premium leather treatment",
            "Odor elimination treatment",
            "Fabric protection application",
            "Complete interior sanitization",
        ],
        exterior=[
            "Everything in Premium Detail",
            "Multi-stage paint correction",
            "Ceramic coating application",
            "Engine bay cleaning",
            "Chrome polishing and protection",
            "6-month paint protection warranty",
        ],
        order_index=3,
    ),
]

DEFAULT_TESTIMONIALS: List[Testimonial] = [
    Testimonial(
        id="1",
        name="Sarah Johnson",
        location="Kilgore, TX",
        rating=5,
        text=(
            "Absolutely amazing service! My car looks brand new. The Detail Proz team was "
            "professional, punctual, and exceeded my expectations."
        ),
        avatar_url="/assets/customer_avatar_2.png",
        source=TestimonialSource.MANUAL,
        is_published=True,
        order_index=1,
    ),
    Testimonial(
        id="2",
        name="Mike Rodriguez",
        location="Longview, TX",
        rating=5,
        text=(
            "Best mobile detailing service in East Texas! They came to my office and my truck "
            "looked incredible when they finished."
        ),
        avatar_url="/assets/customer_avatar_3.png",
        source=TestimonialSource.MANUAL,
        is_published=True,
        order_index=2,
    ),
    Testimonial(
        id="3",
        name="Jennifer Davis",
        location="Tyler, TX",
        rating=5,
        text=(
            "I was skeptical about mobile detailing, but The Detail Proz proved me wrong. "
            "Convenient, professional, and outstanding results!"
        ),
        avatar_url="/assets/customer_avatar_4.png",
        source=TestimonialSource.MANUAL,
        is_published=True,
        order_index=3,
    ),
]

DEFAULT_GALLERY_IMAGES: List[GalleryImage] = [
    GalleryImage(
        id="1",
        url="https://images.unsplash.com/photo-1520340356584-f9917d1eea6f?auto=format&fit=crop&w=800&h=600&q=80",
        alt_text="Car interior cleaning and detailing",
        category=GalleryCategory.PROCESS,
        order_index=1,
    ),
    GalleryImage(
        id="2",
        url="https://images.unsplash.com/photo-1607860108855-64acf2078ed9?auto=format&fit=crop&w=800&h=600&q=80",
        alt_text="Professional car detailing equipment and supplies",
        category=GalleryCategory.PROCESS,
        order_index=2,
    ),
    GalleryImage(
        id="3",
        url="https://images.pexels.com/photos/6872149/pexels-photo-6872149.jpeg?auto=compress&cs=tinysrgb&w=800&h=600&fit=crop",
        alt_text="Mobile car washing and detailing",
        category=GalleryCategory.PROCESS,
        order_index=3,
    ),
    GalleryImage(
        id="4",
        url="https://images.unsplash.com/photo-1605559424843-9e4c228bf1c2?auto=format&fit=crop&w=800&h=600&q=80",
        alt_text="Professional car washing service",
        category=GalleryCategory.AFTER,
        order_index=4,
    ),
    GalleryImage(
        id="5",
        url="https://images.unsplash.com/photo-1558618666-fcd25c85cd64?auto=format&fit=crop&w=800&h=600&q=80",
        alt_text="Premium car detailing service",
        category=GalleryCategory.AFTER,
        order_index=5,
    ),
]
