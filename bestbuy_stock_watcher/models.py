"""Domain models used by the application."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProductAvailability:
    identifier: str
    name: str
    available: bool
    url: str = ""


@dataclass(frozen=True)
class Transition:
    """A change in availability between two successful polls."""

    identifier: str
    name: str
    previous: bool
    current: bool
    url: str = ""

    @property
    def became_available(self) -> bool:
        return self.current and not self.previous

    @property
    def title(self) -> str:
        return "Product Available" if self.current else "Product Unavailable"

    def to_message(self) -> str:
        status = "✅ now available" if self.current else "❌ no longer available"
        message = f"{self.name} (SKU {self.identifier}) is {status}."
        if self.url:
            message += f"\nLink: {self.url}"
        return message
