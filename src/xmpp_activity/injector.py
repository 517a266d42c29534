"""Write Activity Streams extensions into a pubsub item's Atom entry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from xmpp_activity.core.constants import NS_ATOM, REVIEW, TARGET, THREAD, Extension, qname
from xmpp_activity.extractor import as_element
from xmpp_activity.record import ActivityRecord
from xmpp_activity.stanza import ActivityTarget, InReplyToStanza, Rating, format_rating

__all__ = ["format_rating", "inject", "inject_record"]


def _build_in_reply_to(data: Mapping[str, Any]) -> InReplyToStanza:
    stanza = InReplyToStanza()
    for name in THREAD.fields:
        value = data.get(name)
        if value is not None:
            stanza[name] = value
    return stanza


def _build_target(data: Mapping[str, Any]) -> ActivityTarget:
    # Both children are always written, even when a value is missing.
    stanza = ActivityTarget()
    stanza.set_id(data.get("id"))
    stanza.set_object_type(data.get("object-type"))
    return stanza


def _build_rating(data: Mapping[str, Any]) -> Rating:
    stanza = Rating()
    rating = data.get("rating")
    if rating is not None:
        stanza["value"] = rating
    return stanza


_BUILDERS: tuple[tuple[Extension, Any], ...] = (
    (THREAD, _build_in_reply_to),
    (TARGET, _build_target),
    (REVIEW, _build_rating),
)


def inject(record: Mapping[str, Any], item: Any) -> None:
    """Append an element to the item's Atom entry for each extension in ``record``.

    The entry must already be ``{NS_ATOM}entry``; otherwise nothing happens.
    Presence of a key is what counts, so ``{"in-reply-to": {}}`` still writes
    an empty ``in-reply-to``. Each written extension also declares its prefix
    on the entry (``xmlns:thr`` and so on).
    """
    root = as_element(item)
    entry = root.find(qname(NS_ATOM, "entry"))
    if entry is None:
        logger.debug("No Atom entry under {}; nothing to inject", root.tag)
        return

    for ext, build in _BUILDERS:
        if ext.key not in record:
            continue
        entry.set(ext.declaration, ext.namespace)
        entry.append(build(record[ext.key] or {}).xml)
        logger.debug("Injected {} into entry", ext.key)


def inject_record(record: ActivityRecord, item: Any) -> None:
    """Typed variant of inject."""
    inject(record.as_mapping(), item)
