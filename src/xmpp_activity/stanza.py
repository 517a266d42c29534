"""slixmpp stanza plugins for the Atom entry extensions.

Stanza Interface (AtomEntry plugins):
    in_reply_to -- ``thr:in-reply-to`` with ``ref``, ``type`` and ``href``.
    target      -- ``activity:target`` with ``id`` and ``object_type``.
    rating      -- ``review:rating`` with ``value``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from slixmpp.xmlstream import ElementBase, register_stanza_plugin

from xmpp_activity.core.constants import NS_ACTIVITY, NS_ATOM, NS_REVIEW, NS_THREAD, qname


def format_rating(value: Any) -> str:
    """Canonical decimal text for a rating: ``5`` and ``5.0`` both give ``"5"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AtomEntry(ElementBase):
    """Atom feed entry carried as a pubsub item payload."""

    namespace = NS_ATOM
    name = "entry"
    plugin_attrib = "entry"
    interfaces: set[str] = set()


class InReplyToStanza(ElementBase):
    """Thread reference; an empty string is written as an empty attribute."""

    namespace = NS_THREAD
    name = "in-reply-to"
    plugin_attrib = "in_reply_to"
    interfaces = {"ref", "type", "href"}

    def set_ref(self, value: str) -> None:
        self.xml.set("ref", value)

    def set_type(self, value: str) -> None:
        self.xml.set("type", value)

    def set_href(self, value: str) -> None:
        self.xml.set("href", value)


class ActivityTarget(ElementBase):
    """Activity target; ``id`` lives in the Atom namespace."""

    namespace = NS_ACTIVITY
    name = "target"
    plugin_attrib = "target"
    interfaces = {"id", "object_type"}

    def _child(self, name: str) -> ET.Element:
        elem = self.xml.find(name)
        if elem is None:
            elem = ET.SubElement(self.xml, name)
        return elem

    def _child_text(self, name: str) -> str | None:
        elem = self.xml.find(name)
        return elem.text if elem is not None else None

    def get_id(self) -> str | None:
        return self._child_text(qname(NS_ATOM, "id"))

    def set_id(self, value: str | None) -> None:
        self._child(qname(NS_ATOM, "id")).text = value

    def get_object_type(self) -> str | None:
        return self._child_text(qname(NS_ACTIVITY, "object-type"))

    def set_object_type(self, value: str | None) -> None:
        self._child(qname(NS_ACTIVITY, "object-type")).text = value


class Rating(ElementBase):
    namespace = NS_REVIEW
    name = "rating"
    plugin_attrib = "rating"
    interfaces = {"value"}

    def get_value(self) -> str:
        return self.xml.text or ""

    def set_value(self, value: Any) -> None:
        self.xml.text = format_rating(value)


register_stanza_plugin(AtomEntry, InReplyToStanza)
register_stanza_plugin(AtomEntry, ActivityTarget)
register_stanza_plugin(AtomEntry, Rating)
