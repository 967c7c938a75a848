"""Static catalog of supported external account providers.

The catalog is read-only reference data for the surrounding application
(e.g. the "link an account" picker). ``ledger.accounts`` does not check a
stored ``(type, provider, name)`` combination against it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

ACCOUNT_TYPES: tuple[str, ...] = ("credit", "bank", "investment")


@dataclass(frozen=True, slots=True)
class Provider:
    id: str
    name: str
    # Card names for credit providers, account names for bank/investment.
    products: tuple[str, ...]


ACCOUNT_PROVIDERS: Mapping[str, tuple[Provider, ...]] = MappingProxyType(
    {
        "credit": (
            Provider("amex", "American Express", ("Platinum Card", "Gold Card", "Blue Cash")),
            Provider("chase", "Chase", ("Sapphire Reserve", "Freedom Unlimited", "Ink Business")),
            Provider("citi", "Citi", ("Double Cash", "Premier", "Custom Cash")),
        ),
        "bank": (
            Provider("chase", "Chase", ("Checking", "Savings")),
            Provider("bofa", "Bank of America", ("Checking", "Savings", "Business")),
            Provider("wells", "Wells Fargo", ("Everyday Checking", "Way2Save")),
        ),
        "investment": (
            Provider("fidelity", "Fidelity", ("Investment Account", "Roth IRA", "401(k)")),
            Provider("vanguard", "Vanguard", ("Brokerage", "Roth IRA", "Traditional IRA")),
            Provider("schwab", "Charles Schwab", ("Brokerage", "Retirement", "Checking")),
        ),
    }
)

# Key under which products are listed in the serialized catalog.
_PRODUCTS_KEY = {"credit": "cards", "bank": "accounts", "investment": "accounts"}


def providers_for(account_type: str) -> tuple[Provider, ...]:
    """Return providers offering ``account_type``; unknown types yield ``()``."""

    return ACCOUNT_PROVIDERS.get(account_type, ())


def find_provider(account_type: str, provider_id: str) -> Provider | None:
    for p in providers_for(account_type):
        if p.id == provider_id:
            return p
    return None


def is_known_product(account_type: str, provider_id: str, product: str) -> bool:
    """True when ``product`` is listed for the provider under ``account_type``."""

    p = find_provider(account_type, provider_id)
    return p is not None and product in p.products


def catalog_as_dict() -> dict[str, list[dict[str, Any]]]:
    """Serialize the catalog to plain JSON-ready data.

    Credit providers list their products under ``"cards"``; bank and
    investment providers under ``"accounts"``.
    """

    return {
        account_type: [
            {"id": p.id, "name": p.name, _PRODUCTS_KEY[account_type]: list(p.products)}
            for p in providers
        ]
        for account_type, providers in ACCOUNT_PROVIDERS.items()
    }


__all__ = [
    "ACCOUNT_PROVIDERS",
    "ACCOUNT_TYPES",
    "Provider",
    "catalog_as_dict",
    "find_provider",
    "is_known_product",
    "providers_for",
]
