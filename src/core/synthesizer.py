"""
Record synthesiser -- turns a (keyword, city) pair into a seed set of
plausible-looking business listings.

The keyword picks a business category, the city picks a locale. Each
category contributes name fragments; each locale contributes area names,
a phone prefix and a domain suffix.
"""

import random
import re
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from loguru import logger

import src.config as cfg
from src.models.business import BusinessRecord


# ── Classification buckets ───────────────────────────────────────────────────

class Category(Enum):
    """Business category, matched by substring in declaration order."""

    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    PHARMACY = "pharmacy"
    SHOP = "shop"
    GYM = "gym"
    DEFAULT = "default"


class Locale(Enum):
    """City bucket, matched by substring in declaration order."""

    LONDON = "london"
    NEW_YORK = "new york"
    DHAKA = "dhaka"
    PARIS = "paris"
    TOKYO = "tokyo"
    DEFAULT = "default"


class LocaleProfile(NamedTuple):
    areas: Tuple[str, ...]
    phone_prefix: str
    domain: str


# ── Vocabulary ───────────────────────────────────────────────────────────────

ADJECTIVES: Tuple[str, ...] = (
    "Premium", "Elite", "Golden", "Royal", "Modern",
    "Classic", "Urban", "Central", "Prime", "Best",
)

TYPE_FRAGMENTS: Dict[Category, Tuple[str, ...]] = {
    Category.RESTAURANT: (
        "Bistro", "Grill", "Kitchen", "Cafe",
        "Diner", "Eatery", "Tavern", "Brasserie",
    ),
    Category.HOTEL: (
        "Hotel", "Inn", "Resort", "Lodge",
        "Suites", "Plaza", "Grand", "Royal",
    ),
    Category.PHARMACY: (
        "Pharmacy", "Drugstore", "Medical", "Health",
        "Care", "Wellness", "Rx", "Apothecary",
    ),
    Category.SHOP: (
        "Store", "Shop", "Market", "Boutique",
        "Outlet", "Emporium", "Gallery", "Corner",
    ),
    Category.GYM: (
        "Fitness", "Gym", "Health Club", "Training",
        "Workout", "Sports", "Athletic", "Wellness",
    ),
    Category.DEFAULT: (
        "Business", "Service", "Company", "Center",
        "Group", "Solutions", "Pro", "Plus",
    ),
}

LOCALE_PROFILES: Dict[Locale, LocaleProfile] = {
    Locale.LONDON: LocaleProfile(
        areas=(
            "Mayfair", "Kensington", "Chelsea", "Camden",
            "Shoreditch", "Canary Wharf", "Westminster", "Soho",
        ),
        phone_prefix="+44-20-",
        domain=".co.uk",
    ),
    Locale.NEW_YORK: LocaleProfile(
        areas=(
            "Manhattan", "Brooklyn", "Queens", "Bronx",
            "Staten Island", "Midtown", "Downtown", "Upper East Side",
        ),
        phone_prefix="+1-212-",
        domain=".com",
    ),
    Locale.DHAKA: LocaleProfile(
        areas=(
            "Gulshan", "Dhanmondi", "Uttara", "Banani",
            "Mirpur", "Wari", "Old Dhaka", "Tejgaon",
        ),
        phone_prefix="+880-1",
        domain=".bd",
    ),
    Locale.PARIS: LocaleProfile(
        areas=(
            "Champs-Élysées", "Montmartre", "Le Marais", "Saint-Germain",
            "Bastille", "Belleville", "Pigalle", "Louvre",
        ),
        phone_prefix="+33-1-",
        domain=".fr",
    ),
    Locale.TOKYO: LocaleProfile(
        areas=(
            "Shibuya", "Shinjuku", "Ginza", "Harajuku",
            "Akihabara", "Roppongi", "Asakusa", "Ikebukuro",
        ),
        phone_prefix="+81-3-",
        domain=".jp",
    ),
    Locale.DEFAULT: LocaleProfile(
        areas=(
            "Downtown", "Central", "North Side", "South Side",
            "East End", "West End", "Old Town", "New District",
        ),
        phone_prefix="+1-555-",
        domain=".com",
    ),
}

_WHITESPACE_RE = re.compile(r"\s+")


# ── Classification ───────────────────────────────────────────────────────────

def classify_keyword(keyword: str) -> Category:
    """First category whose token occurs in *keyword*, else DEFAULT."""
    lowered = keyword.lower()
    for category in Category:
        if category is not Category.DEFAULT and category.value in lowered:
            return category
    return Category.DEFAULT


def classify_city(city: str) -> Locale:
    """First locale whose token occurs in *city*, else DEFAULT."""
    lowered = city.lower()
    for locale in Locale:
        if locale is not Locale.DEFAULT and locale.value in lowered:
            return locale
    return Locale.DEFAULT


def slugify(name: str) -> str:
    """Lowercase *name* and strip all whitespace."""
    return _WHITESPACE_RE.sub("", name.lower())


# ── Generation ───────────────────────────────────────────────────────────────

def synthesize(
    keyword: str,
    city: str,
    rng: Optional[random.Random] = None,
) -> List[BusinessRecord]:
    """
    Build the seed set for one run.

    Parameters
    ----------
    keyword : str
        Free-text search keyword (already validated as non-blank).
    city : str
        Free-text city (already validated as non-blank).
    rng : random.Random, optional
        Source of randomness for phone numbers, ratings and review counts.
        Defaults to the module-level generator.

    Returns
    -------
    List[BusinessRecord]
        Exactly ``SEED_SET_SIZE`` records with ids "1".."8".
    """
    rng = rng if rng is not None else random  # type: ignore[assignment]
    city = city.strip()

    category = classify_keyword(keyword)
    locale = classify_city(city)
    types = TYPE_FRAGMENTS[category]
    profile = LOCALE_PROFILES[locale]

    logger.debug(
        "Synthesising seeds: keyword='{}' -> {}, city='{}' -> {}",
        keyword,
        category.name,
        city,
        locale.name,
    )

    seeds: List[BusinessRecord] = []
    for i in range(cfg.SEED_SET_SIZE):
        name = f"{ADJECTIVES[i % len(ADJECTIVES)]} {types[i % len(types)]}"
        slug = slugify(name)
        area = profile.areas[i % len(profile.areas)]
        rating = round((cfg.RATING_MIN + rng.random() * cfg.RATING_SPAN) * 10) / 10

        seeds.append(
            BusinessRecord(
                id=str(i + 1),
                name=name,
                phone=f"{profile.phone_prefix}{rng.randint(100000, 999999)}",
                email=f"contact@{slug}{profile.domain}",
                website=f"https://{slug}{profile.domain}",
                address=f"{area}, {city}",
                rating=rating,
                reviews=int(rng.random() * cfg.REVIEWS_SPAN) + cfg.REVIEWS_MIN,
            )
        )
    return seeds
