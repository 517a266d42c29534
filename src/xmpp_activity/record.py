"""Typed form of the activity record.

The wire translators work on plain mappings keyed ``in-reply-to``, ``target``
and ``review``. ``ActivityRecord`` is the same data as a closed set of three
optional fields, converted with ``from_mapping`` / ``as_mapping``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass
class InReplyTo:
    """Thread reference (``thr:in-reply-to``)."""

    ref: str | None = None
    type: str | None = None
    href: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InReplyTo:
        return cls(ref=data.get("ref"), type=data.get("type"), href=data.get("href"))

    def as_mapping(self) -> dict[str, Any]:
        fields = (("ref", self.ref), ("type", self.type), ("href", self.href))
        return {k: v for k, v in fields if v is not None}


@dataclass
class Target:
    """Activity target (``activity:target``)."""

    id: str | None = None
    object_type: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Target:
        return cls(id=data.get("id"), object_type=data.get("object-type"))

    def as_mapping(self) -> dict[str, Any]:
        return {"id": self.id, "object-type": self.object_type}


@dataclass
class Review:
    """Review rating; NaN when the wire text was not a number."""

    rating: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Review:
        return cls(rating=data.get("rating"))

    def as_mapping(self) -> dict[str, Any]:
        return {} if self.rating is None else {"rating": self.rating}


@dataclass
class ActivityRecord:
    """Activity metadata for one entry. ``None`` means the extension is absent."""

    in_reply_to: InReplyTo | None = None
    target: Target | None = None
    review: Review | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ActivityRecord:
        """Build from the mapping shape; present-but-empty sub-mappings are kept."""
        record = cls()
        if "in-reply-to" in data:
            record.in_reply_to = InReplyTo.from_mapping(data["in-reply-to"] or {})
        if "target" in data:
            record.target = Target.from_mapping(data["target"] or {})
        if "review" in data:
            record.review = Review.from_mapping(data["review"] or {})
        return record

    def as_mapping(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.in_reply_to is not None:
            result["in-reply-to"] = self.in_reply_to.as_mapping()
        if self.target is not None:
            result["target"] = self.target.as_mapping()
        if self.review is not None:
            result["review"] = self.review.as_mapping()
        return result

    def is_empty(self) -> bool:
        return self.in_reply_to is None and self.target is None and self.review is None
