"""
Unit tests for src/core/synthesizer.py.

Generation is randomised, so these tests assert ranges and structure
rather than exact values (except where a seeded generator is used).
"""

import random

import pytest

import src.config as cfg
from src.core.synthesizer import (
    ADJECTIVES,
    LOCALE_PROFILES,
    TYPE_FRAGMENTS,
    Category,
    Locale,
    classify_city,
    classify_keyword,
    slugify,
    synthesize,
)


# =============================================================================
# CLASSIFICATION
# =============================================================================

class TestClassifyKeyword:

    @pytest.mark.parametrize(
        "keyword, expected",
        [
            ("restaurant", Category.RESTAURANT),
            ("Best Restaurants near me", Category.RESTAURANT),
            ("HOTELS", Category.HOTEL),
            ("24h pharmacy", Category.PHARMACY),
            ("coffee shop", Category.SHOP),
            ("gym", Category.GYM),
        ],
    )
    def test_known_tokens(self, keyword, expected):
        assert classify_keyword(keyword) is expected

    def test_first_match_wins(self):
        """'restaurant' is declared before 'hotel'."""
        assert classify_keyword("hotel restaurant") is Category.RESTAURANT

    @pytest.mark.parametrize("keyword", ["plumber", "dentist", "", "  ", "ジム"])
    def test_unknown_falls_back_to_default(self, keyword):
        assert classify_keyword(keyword) is Category.DEFAULT


class TestClassifyCity:

    @pytest.mark.parametrize(
        "city, expected",
        [
            ("London", Locale.LONDON),
            ("New York City", Locale.NEW_YORK),
            ("dhaka", Locale.DHAKA),
            ("Paris, France", Locale.PARIS),
            ("TOKYO", Locale.TOKYO),
        ],
    )
    def test_known_cities(self, city, expected):
        assert classify_city(city) is expected

    @pytest.mark.parametrize("city", ["Chicago", "NewYork", "", "Berlin"])
    def test_unknown_falls_back_to_default(self, city):
        assert classify_city(city) is Locale.DEFAULT


class TestVocabulary:

    def test_every_category_has_eight_fragments(self):
        for category in Category:
            assert len(TYPE_FRAGMENTS[category]) == cfg.SEED_SET_SIZE

    def test_every_locale_has_eight_areas(self):
        for locale in Locale:
            assert len(LOCALE_PROFILES[locale].areas) == cfg.SEED_SET_SIZE

    def test_slugify_strips_whitespace(self):
        assert slugify("Golden Health Club") == "goldenhealthclub"
        assert slugify("Premium\tBistro ") == "premiumbistro"


# =============================================================================
# SYNTHESIS
# =============================================================================

class TestSynthesize:

    @pytest.mark.parametrize(
        "keyword, city",
        [("restaurant", "Dhaka"), ("hotel", "London"), ("anything", "Nowhere")],
    )
    def test_always_eight_records(self, keyword, city):
        assert len(synthesize(keyword, city)) == 8

    def test_ranges(self):
        for _ in range(20):
            for record in synthesize("gym", "Tokyo"):
                assert 3.5 <= record.rating <= 5.0
                assert round(record.rating, 1) == record.rating
                assert 50 <= record.reviews <= 549

    def test_ids_are_one_to_eight(self):
        seeds = synthesize("shop", "Paris")
        assert [s.id for s in seeds] == [str(i) for i in range(1, 9)]

    def test_names_combine_adjective_and_type(self):
        seeds = synthesize("restaurant", "Dhaka")
        types = TYPE_FRAGMENTS[Category.RESTAURANT]
        for i, seed in enumerate(seeds):
            assert seed.name == f"{ADJECTIVES[i]} {types[i]}"

    def test_email_and_website_share_slug_and_domain(self):
        for seed in synthesize("hotel", "London"):
            slug = slugify(seed.name)
            assert seed.email == f"contact@{slug}.co.uk"
            assert seed.website == f"https://{slug}.co.uk"

    def test_phone_uses_locale_prefix(self):
        for seed in synthesize("pharmacy", "Dhaka"):
            assert seed.phone.startswith("+880-1")
            suffix = seed.phone[len("+880-1"):]
            assert suffix.isdigit() and len(suffix) == 6

    def test_address_uses_area_and_trimmed_city(self):
        seeds = synthesize("restaurant", "  Dhaka ")
        areas = LOCALE_PROFILES[Locale.DHAKA].areas
        for seed, area in zip(seeds, areas):
            assert seed.address == f"{area}, Dhaka"

    def test_default_locale(self):
        seeds = synthesize("plumber", "Springfield")
        assert all(s.phone.startswith("+1-555-") for s in seeds)
        assert all(s.website.endswith(".com") for s in seeds)
        assert seeds[0].name == "Premium Business"

    def test_seeded_generator_is_reproducible(self):
        a = synthesize("gym", "Tokyo", rng=random.Random(42))
        b = synthesize("gym", "Tokyo", rng=random.Random(42))
        assert a == b
