# quotesync Quote Item
# Value type for a single quote and its dedup key

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from quotesync.errors import ParseError, ValidationError


class DedupKey(str, Enum):
    """Which fields decide whether two quotes are the same."""

    TEXT = "text"
    TEXT_AUTHOR = "text_author"


@dataclass(frozen=True)
class Quote:
    """
    A stored quote.

    Quotes have no surrogate id; they are compared by value.
    ``author`` is None when absent, never an empty string.
    """

    text: str
    category: str
    author: Optional[str] = None

    @classmethod
    def create(cls, text: str, category: str, author: Optional[str] = None) -> "Quote":
        """
        Build a quote from user input.

        Strips surrounding whitespace and turns a blank author into None.

        Raises:
            ValidationError: If text or category is blank.
        """
        quote = cls(
            text=(text or "").strip(),
            category=(category or "").strip(),
            author=(author or "").strip() or None,
        )
        quote.validate()
        return quote

    def validate(self) -> None:
        """Raise ValidationError if a required field is blank."""
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValidationError("Quote text is required", field="text")
        if not isinstance(self.category, str) or not self.category.strip():
            raise ValidationError("Quote category is required", field="category")

    def key(self, mode: DedupKey = DedupKey.TEXT) -> tuple:
        """Get the dedup key for this quote."""
        if mode == DedupKey.TEXT_AUTHOR:
            return (self.text, self.author)
        return (self.text,)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting an absent author."""
        data: dict[str, Any] = {"text": self.text}
        if self.author is not None:
            data["author"] = self.author
        data["category"] = self.category
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Quote":
        """
        Create from a decoded JSON object.

        Raises:
            ParseError: If the object is not a well-formed quote.
        """
        if not isinstance(data, dict):
            raise ParseError(f"Expected a quote object, got {type(data).__name__}")

        text = data.get("text")
        category = data.get("category")
        author = data.get("author")

        if not isinstance(text, str) or not text.strip():
            raise ParseError("Quote is missing a non-empty 'text'")
        if not isinstance(category, str) or not category.strip():
            raise ParseError(f"Quote {text[:40]!r} is missing a non-empty 'category'")
        if author is not None and not isinstance(author, str):
            raise ParseError(f"Quote {text[:40]!r} has a non-string 'author'")

        return cls(text=text, category=category, author=author or None)


def quotes_from_list(data: Any) -> list[Quote]:
    """
    Parse a decoded JSON array into quotes.

    Raises:
        ParseError: If data is not a list or any element is malformed.
    """
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of quotes, got {type(data).__name__}")
    return [Quote.from_dict(entry) for entry in data]


def unique_by_key(quotes: list[Quote], mode: DedupKey = DedupKey.TEXT, *, exclude: Optional[set] = None) -> list[Quote]:
    """
    Drop quotes whose key is in ``exclude`` or already seen earlier in the list.

    Relative order is preserved; the first occurrence of a key wins.
    """
    seen = set(exclude or ())
    result: list[Quote] = []
    for quote in quotes:
        key = quote.key(mode)
        if key in seen:
            continue
        seen.add(key)
        result.append(quote)
    return result
