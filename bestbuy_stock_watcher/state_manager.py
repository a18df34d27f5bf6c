"""In-memory availability state tracking."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .models import ProductAvailability, Transition

logger = logging.getLogger(__name__)


class AvailabilityTracker:
    """Remember the last observed availability per SKU and report changes.

    SKUs that were never observed count as unavailable, so the first poll that
    sees a product in stock reports it as newly available. State lives for the
    lifetime of the process only.
    """

    def __init__(self) -> None:
        self._state: Dict[str, bool] = {}

    def state_of(self, identifier: str) -> bool:
        return self._state.get(identifier, False)

    def snapshot(self) -> Dict[str, bool]:
        return dict(self._state)

    def observe(self, products: Iterable[ProductAvailability]) -> List[Transition]:
        """Record a fresh snapshot and return the transitions it caused.

        SKUs missing from ``products`` keep their previous state.
        """
        transitions: List[Transition] = []
        for product in products:
            previous = self._state.get(product.identifier, False)
            self._state[product.identifier] = product.available
            if previous == product.available:
                continue
            transitions.append(
                Transition(
                    identifier=product.identifier,
                    name=product.name,
                    previous=previous,
                    current=product.available,
                    url=product.url,
                )
            )
        logger.debug("Tracker state: %s, transitions: %s", self._state, len(transitions))
        return transitions
