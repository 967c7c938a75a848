"""Category catalog: a name-unique, typed list of transaction labels.

Two static seed lists cover two onboarding tiers: :data:`DEFAULT_CATEGORIES`
(a short starter set) and :data:`EXTENDED_CATEGORIES` (a larger set including
bank and investment specific labels). The lists overlap on a few names.

Exports
-------
- ``create_category(...)``: strict insert; a duplicate name raises
  ``UniquenessViolation``.
- ``seed_categories(...)``: idempotent insert of seed entries; names already
  present (in the store or earlier in the input) are skipped.
- ``list_categories(...)`` / ``get_category_by_name(...)``: lookups.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ledger_db.models import Category
from sqlalchemy import select
from sqlalchemy.orm import Session

from .logging_setup import get_logger
from .persistence import flush_or_raise

logger = get_logger("ledger.categories")

CATEGORY_TYPES: tuple[str, ...] = ("income", "expense")


@dataclass(frozen=True, slots=True)
class CategorySeed:
    name: str
    type: str


DEFAULT_CATEGORIES: tuple[CategorySeed, ...] = (
    CategorySeed("Salary", "income"),
    CategorySeed("Freelance", "income"),
    CategorySeed("Investments", "income"),
    CategorySeed("Other Income", "income"),
    CategorySeed("Housing", "expense"),
    CategorySeed("Transportation", "expense"),
    CategorySeed("Food", "expense"),
    CategorySeed("Utilities", "expense"),
    CategorySeed("Healthcare", "expense"),
    CategorySeed("Entertainment", "expense"),
    CategorySeed("Shopping", "expense"),
    CategorySeed("Education", "expense"),
    CategorySeed("Savings", "expense"),
    CategorySeed("Other Expenses", "expense"),
)

EXTENDED_CATEGORIES: tuple[CategorySeed, ...] = (
    # General spending
    CategorySeed("Dining & Restaurants", "expense"),
    CategorySeed("Travel & Transportation", "expense"),
    CategorySeed("Groceries", "expense"),
    CategorySeed("Shopping & Retail", "expense"),
    CategorySeed("Entertainment", "expense"),
    CategorySeed("Bills & Utilities", "expense"),
    CategorySeed("Health & Wellness", "expense"),
    CategorySeed("Auto & Transport", "expense"),
    CategorySeed("Home & Garden", "expense"),
    CategorySeed("Education", "expense"),
    # Banking
    CategorySeed("Direct Deposit", "income"),
    CategorySeed("Interest Income", "income"),
    CategorySeed("Transfers", "income"),
    CategorySeed("Refunds", "income"),
    CategorySeed("ATM Withdrawal", "expense"),
    CategorySeed("Bank Fees", "expense"),
    CategorySeed("Mortgage/Rent", "expense"),
    CategorySeed("Insurance", "expense"),
    # Investments
    CategorySeed("Dividend Income", "income"),
    CategorySeed("Capital Gains", "income"),
    CategorySeed("Investment Income", "income"),
    CategorySeed("Stock Purchase", "expense"),
    CategorySeed("Bond Purchase", "expense"),
    CategorySeed("ETF Purchase", "expense"),
    CategorySeed("Mutual Fund Purchase", "expense"),
    CategorySeed("Trading Fees", "expense"),
)

SEED_TIERS: Mapping[str, tuple[CategorySeed, ...]] = MappingProxyType(
    {
        "default": DEFAULT_CATEGORIES,
        "extended": EXTENDED_CATEGORIES,
        "all": DEFAULT_CATEGORIES + EXTENDED_CATEGORIES,
    }
)


def create_category(session: Session, *, name: str, type: str) -> Category:
    """Insert one category; an existing ``name`` raises ``UniquenessViolation``."""

    row = Category(name=name, type=type)
    session.add(row)
    flush_or_raise(session, context=f"category {name!r}")
    logger.info("Created category %r (%s)", name, type)
    return row


def get_category_by_name(session: Session, name: str) -> Category | None:
    return session.execute(select(Category).where(Category.name == name)).scalars().first()


def list_categories(session: Session, *, type: str | None = None) -> list[Category]:
    """Return categories sorted by type then name, optionally of one ``type``."""

    stmt = select(Category)
    if type is not None:
        stmt = stmt.where(Category.type == type)
    stmt = stmt.order_by(Category.type, Category.name)
    return list(session.execute(stmt).scalars().all())


def seed_categories(session: Session, seeds: Iterable[CategorySeed]) -> int:
    """Insert seed entries whose names are not present yet; return rows inserted.

    Duplicates are matched on the exact name, both against the store and
    within ``seeds`` (first occurrence wins). Re-running a seed inserts
    nothing and is not an error. A concurrent seeder inserting the same name
    between the check and the flush still raises ``UniquenessViolation``.
    """

    existing = set(session.execute(select(Category.name)).scalars().all())
    inserted = 0
    for seed in seeds:
        if seed.name in existing:
            continue
        session.add(Category(name=seed.name, type=seed.type))
        existing.add(seed.name)
        inserted += 1
    flush_or_raise(session, context="category seed")
    logger.info("Seeded %d categories (%d names now present)", inserted, len(existing))
    return inserted


__all__ = [
    "CATEGORY_TYPES",
    "CategorySeed",
    "DEFAULT_CATEGORIES",
    "EXTENDED_CATEGORIES",
    "SEED_TIERS",
    "create_category",
    "get_category_by_name",
    "list_categories",
    "seed_categories",
]
