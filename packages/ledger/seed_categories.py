from __future__ import annotations

# Seeder for the category catalog.
#
# Usage (example):
#   python -m ledger.seed_categories \
#     --database-url sqlite+pysqlite:///ledger.db \
#     --tier all
#
# Names already present are skipped, so the seeder can be re-run safely.
import argparse

from ledger_db.client import session_scope

from .categories import SEED_TIERS, seed_categories


def reseed_categories(*, database_url: str | None, tier: str) -> int:
    """Seed one tier (``default``, ``extended`` or ``all``); return rows inserted."""

    try:
        seeds = SEED_TIERS[tier]
    except KeyError:
        raise ValueError(f"Unknown seed tier {tier!r}; expected one of {sorted(SEED_TIERS)}") from None
    with session_scope(database_url=database_url) as session:
        return seed_categories(session, seeds)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Seed the category catalog")
    ap.add_argument(
        "--database-url",
        required=False,
        default=None,
        help="SQLAlchemy database URL; falls back to $DATABASE_URL when not set",
    )
    ap.add_argument("--tier", choices=sorted(SEED_TIERS), default="default")
    args = ap.parse_args(argv)

    inserted = reseed_categories(database_url=args.database_url or None, tier=args.tier)
    print(f"inserted {inserted} categories")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual utility
    raise SystemExit(main())
