"""Activity Streams namespace table."""

from __future__ import annotations

from typing import NamedTuple

NS_THREAD = "http://purl.org/syndication/thread/1.0"
NS_ATOM = "http://www.w3.org/2005/Atom"
NS_ACTIVITY = "http://activitystrea.ms/spec/1.0/"
NS_REVIEW = "http://activitystrea.ms/schema/1.0/review"

PREFIX_NS_THREAD = "thr"
PREFIX_NS_ACTIVITY = "activity"
PREFIX_NS_REVIEW = "review"


class Extension(NamedTuple):
    """Static description of one entry extension."""

    namespace: str
    prefix: str
    key: str  # record key
    tag: str  # element appended to the entry
    fields: tuple[str, ...]

    @property
    def declaration(self) -> str:
        """Attribute name binding the prefix on the entry (e.g. ``xmlns:thr``)."""
        return f"xmlns:{self.prefix}"


THREAD = Extension(NS_THREAD, PREFIX_NS_THREAD, "in-reply-to", "in-reply-to", ("ref", "type", "href"))
TARGET = Extension(NS_ACTIVITY, PREFIX_NS_ACTIVITY, "target", "target", ("id", "object-type"))
REVIEW = Extension(NS_REVIEW, PREFIX_NS_REVIEW, "review", "rating", ("rating",))

# Dispatch order for extraction; only the first match is used.
EXTENSIONS: tuple[Extension, ...] = (THREAD, REVIEW, TARGET)

# Entry namespaces that select the target extension.
TARGET_NAMESPACES = frozenset({NS_ATOM, NS_ACTIVITY})


def qname(namespace: str, tag: str) -> str:
    """Clark-notation name as used by ElementTree and slixmpp."""
    return f"{{{namespace}}}{tag}"


def split_qname(name: str) -> tuple[str | None, str]:
    """Split ``{ns}tag`` into ``(ns, tag)``; unqualified names get ``None``."""
    if name[:1] == "{":
        ns, _, local = name[1:].partition("}")
        return ns, local
    return None, name
