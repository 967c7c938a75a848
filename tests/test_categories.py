from __future__ import annotations

import dataclasses

import pytest
from ledger_db.models import Category

from ledger import categories
from ledger.categories import DEFAULT_CATEGORIES, EXTENDED_CATEGORIES, SEED_TIERS
from ledger.errors import UniquenessViolation
from tests.helpers.db import count_rows


def test_seed_lists_match_the_published_catalog():
    assert len(DEFAULT_CATEGORIES) == 14
    assert len(EXTENDED_CATEGORIES) == 26
    assert DEFAULT_CATEGORIES[0] == categories.CategorySeed("Salary", "income")
    assert DEFAULT_CATEGORIES[-1] == categories.CategorySeed("Other Expenses", "expense")
    assert EXTENDED_CATEGORIES[0] == categories.CategorySeed("Dining & Restaurants", "expense")
    assert EXTENDED_CATEGORIES[-1] == categories.CategorySeed("Trading Fees", "expense")
    assert {s.type for s in DEFAULT_CATEGORIES + EXTENDED_CATEGORIES} == {"income", "expense"}
    # Transfers is typed as income in the extended list.
    assert categories.CategorySeed("Transfers", "income") in EXTENDED_CATEGORIES


def test_seed_lists_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CATEGORIES[0].name = "Wages"  # type: ignore[misc]
    with pytest.raises(TypeError):
        SEED_TIERS["custom"] = ()  # type: ignore[index]


def test_seed_default_tier_inserts_all(session):
    assert categories.seed_categories(session, DEFAULT_CATEGORIES) == 14
    assert count_rows(session, Category) == 14


def test_reseeding_is_a_no_op(session):
    categories.seed_categories(session, DEFAULT_CATEGORIES)
    session.commit()
    assert categories.seed_categories(session, DEFAULT_CATEGORIES) == 0
    assert count_rows(session, Category) == 14


def test_seeding_both_tiers_skips_overlapping_names(session):
    overlap = {s.name for s in DEFAULT_CATEGORIES} & {s.name for s in EXTENDED_CATEGORIES}
    assert overlap == {"Entertainment", "Education"}
    inserted = categories.seed_categories(session, SEED_TIERS["all"])
    assert inserted == 14 + 26 - len(overlap)


def test_create_category_duplicate_name_conflicts(session):
    categories.create_category(session, name="Pets", type="expense")
    session.commit()
    with pytest.raises(UniquenessViolation):
        categories.create_category(session, name="Pets", type="expense")


def test_create_category_after_seed_conflicts(session):
    categories.seed_categories(session, DEFAULT_CATEGORIES)
    session.commit()
    with pytest.raises(UniquenessViolation):
        categories.create_category(session, name="Salary", type="income")


def test_list_and_lookup(session):
    categories.seed_categories(session, DEFAULT_CATEGORIES)
    income = categories.list_categories(session, type="income")
    assert [c.name for c in income] == ["Freelance", "Investments", "Other Income", "Salary"]
    assert categories.get_category_by_name(session, "Food").type == "expense"
    assert categories.get_category_by_name(session, "Nope") is None
