"""Usage: resolve extracted customer names against the known customer registry."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from cost_parser.schemas.cost import CustomerEntry, ParsedCostItem
from cost_parser.services.cost.primitives import normalize_name

logger = logging.getLogger(__name__)


class CustomerMatcher:
    """Registry lookup by normalized name.

    An exact normalized match wins; otherwise the first registry entry whose
    normalized name contains, or is contained in, the candidate is used.
    Containment is loose for short names (a registry name normalizing to
    ``"co"`` is contained in many candidates), so registry order decides
    those cases.
    """

    def __init__(self, customers: Iterable[CustomerEntry]) -> None:
        self._entries: list[tuple[str, str]] = []
        self._exact: dict[str, str] = {}
        for customer in customers:
            key = normalize_name(customer.name)
            if not key:
                continue
            self._entries.append((key, customer.id))
            self._exact.setdefault(key, customer.id)

    def __len__(self) -> int:
        return len(self._entries)

    def match(self, name: str | None) -> str | None:
        candidate = normalize_name(name)
        if not candidate:
            return None

        direct = self._exact.get(candidate)
        if direct is not None:
            return direct

        for key, customer_id in self._entries:
            if key in candidate or candidate in key:
                logger.debug("Customer partial match: %r -> %s", name, customer_id)
                return customer_id
        return None

    def apply(self, items: Sequence[ParsedCostItem]) -> list[ParsedCostItem]:
        return [item.with_match(self.match(item.match_name())) for item in items]


def match_customer_id(name: str | None, customers: Iterable[CustomerEntry]) -> str | None:
    return CustomerMatcher(customers).match(name)
