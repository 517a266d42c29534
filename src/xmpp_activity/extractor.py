"""Read Activity Streams extensions out of a pubsub item's Atom entry."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from collections.abc import MutableMapping
from typing import Any

from loguru import logger

from xmpp_activity.config import cfg
from xmpp_activity.core.constants import (
    EXTENSIONS,
    NS_ACTIVITY,
    NS_ATOM,
    NS_REVIEW,
    NS_THREAD,
    REVIEW,
    TARGET,
    TARGET_NAMESPACES,
    THREAD,
    Extension,
    qname,
    split_qname,
)
from xmpp_activity.core.errors import MalformedRatingError
from xmpp_activity.record import ActivityRecord


def as_element(item: Any) -> ET.Element:
    """Return the ElementTree node for an element or a slixmpp stanza."""
    xml = getattr(item, "xml", None)
    return xml if xml is not None else item


def find_entry(item: Any) -> ET.Element | None:
    """First direct child named ``entry``, in any namespace."""
    for child in as_element(item):
        if isinstance(child.tag, str) and split_qname(child.tag)[1] == "entry":
            return child
    return None


# Namespaces an extension's element may be qualified with inside an Atom entry.
_ELEMENT_NAMESPACES: dict[str, tuple[str, ...]] = {
    THREAD.key: (NS_THREAD,),
    REVIEW.key: (NS_REVIEW,),
    TARGET.key: (NS_ACTIVITY, NS_ATOM),
}


def namespaces_in_scope(entry: ET.Element) -> set[str]:
    """The entry's own namespace plus any ``xmlns:<prefix>`` attribute set on it."""
    ns, _ = split_qname(entry.tag)
    scope = {ns} if ns else set()
    scope.update(v for k, v in entry.attrib.items() if k.startswith("xmlns:"))
    return scope


def dispatch(entry: ET.Element) -> Extension | None:
    """Pick the single extension this entry carries, or None.

    An Atom entry carries its extensions as prefixed children, and ElementTree
    drops prefix declarations when parsing, so it is dispatched on the first
    extension element actually present (target when there is none). Any other
    entry is dispatched on the namespaces in scope.
    """
    ns, _ = split_qname(entry.tag)
    if ns == NS_ATOM:
        for ext in EXTENSIONS:
            if _find_child(entry, ext.tag, *_ELEMENT_NAMESPACES[ext.key]) is not None:
                return ext
        return TARGET

    scope = namespaces_in_scope(entry)
    for ext in EXTENSIONS:
        if ext is TARGET:
            if scope & TARGET_NAMESPACES:
                return ext
        elif ext.namespace in scope:
            return ext
    return None


def _find_child(parent: ET.Element, tag: str, *namespaces: str | None) -> ET.Element | None:
    for ns in namespaces:
        if ns:
            elem = parent.find(qname(ns, tag))
            if elem is not None:
                return elem
    return parent.find(tag)


def _child_text(parent: ET.Element, tag: str, *namespaces: str | None) -> str | None:
    elem = _find_child(parent, tag, *namespaces)
    if elem is None:
        return None
    return elem.text or ""


def parse_rating(text: str | None, *, strict: bool = False) -> float:
    """Decode rating text; NaN on failure unless strict."""
    try:
        return float((text or "").strip())
    except ValueError as exc:
        if strict:
            raise MalformedRatingError(
                f"rating is not a number: {text!r}",
                code="malformed_rating",
                details={"text": text},
                original_error=exc,
            ) from exc
        logger.warning("Rating {!r} is not a number; using NaN", text)
        return math.nan


def _extract_thread(entry: ET.Element, record: MutableMapping[str, Any], entry_ns: str | None) -> None:
    elem = _find_child(entry, THREAD.tag, NS_THREAD, entry_ns)
    if elem is None:
        return
    record[THREAD.key] = {name: elem.get(name) for name in THREAD.fields if elem.get(name) is not None}


def _extract_target(entry: ET.Element, record: MutableMapping[str, Any], entry_ns: str | None) -> None:
    elem = _find_child(entry, TARGET.tag, NS_ACTIVITY, NS_ATOM, entry_ns)
    if elem is None:
        return
    record[TARGET.key] = {
        "id": _child_text(elem, "id", NS_ATOM, NS_ACTIVITY),
        "object-type": _child_text(elem, "object-type", NS_ACTIVITY, NS_ATOM),
    }


def _extract_review(
    entry: ET.Element, record: MutableMapping[str, Any], entry_ns: str | None, *, strict: bool
) -> None:
    elem = _find_child(entry, REVIEW.tag, NS_REVIEW, entry_ns)
    if elem is None:
        return
    record[REVIEW.key] = {"rating": parse_rating(elem.text, strict=strict)}


def extract(item: Any, record: MutableMapping[str, Any], *, strict: bool | None = None) -> None:
    """Copy the entry's extension data into ``record``.

    ``item`` is the pubsub item element (or slixmpp stanza). At most one of
    ``in-reply-to``, ``target`` or ``review`` is set per call. A missing entry,
    an unrecognized namespace or a missing extension element leaves ``record``
    as it was. With ``strict`` (default: ``cfg.strict_rating``) a non-numeric
    rating raises MalformedRatingError instead of decoding to NaN.
    """
    entry = find_entry(item)
    if entry is None:
        logger.debug("No entry element under {}", as_element(item).tag)
        return
    ext = dispatch(entry)
    if ext is None:
        logger.debug("Entry {} has no activity extension namespace", entry.tag)
        return

    entry_ns, _ = split_qname(entry.tag)
    logger.debug("Extracting {} from entry {}", ext.key, entry.tag)
    if ext is THREAD:
        _extract_thread(entry, record, entry_ns)
    elif ext is TARGET:
        _extract_target(entry, record, entry_ns)
    else:
        if strict is None:
            strict = cfg.strict_rating
        _extract_review(entry, record, entry_ns, strict=strict)


def extract_record(item: Any, *, strict: bool | None = None) -> ActivityRecord:
    """Typed variant of extract."""
    data: dict[str, Any] = {}
    extract(item, data, strict=strict)
    return ActivityRecord.from_mapping(data)
