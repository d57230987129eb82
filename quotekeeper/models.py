"""Data types for quotes and their tags."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any


def generate_id() -> str:
    """Return a random identifier of eight lower-case hex digits."""
    return f"{random.getrandbits(32):08x}"


@dataclass
class Quote:
    """A stored quote."""

    id: str
    text: str
    author: str
    source: str

    @classmethod
    def from_input(cls, data: QuoteInput) -> Quote:
        """Build a new quote with a fresh identifier from user input."""
        return cls(id=generate_id(), text=data.text, author=data.author, source=data.source)


@dataclass
class QuoteInput:
    """The user-supplied fields of a quote."""

    text: str
    author: str
    source: str


@dataclass
class Tag:
    """A single tag attached to a quote."""

    quote_id: str
    tag: str


@dataclass
class QuoteWithTags:
    """A quote together with its tags."""

    quote: Quote
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a flat mapping with the quote's fields and its tags."""
        return {
            "id": self.quote.id,
            "text": self.quote.text,
            "author": self.quote.author,
            "source": self.quote.source,
            "tags": list(self.tags),
        }


def new_quote(text: str, author: str, source: str) -> Quote:
    """Create a quote with a freshly generated identifier."""
    return Quote(id=generate_id(), text=text, author=author, source=source)