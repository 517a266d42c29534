"""Tests for writing activity extensions into an item."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest
from slixmpp.plugins.xep_0060.stanza.pubsub import Item

from xmpp_activity import (
    NS_ACTIVITY,
    NS_ATOM,
    NS_REVIEW,
    NS_THREAD,
    PREFIX_NS_ACTIVITY,
    PREFIX_NS_REVIEW,
    PREFIX_NS_THREAD,
    ActivityRecord,
    InReplyTo,
    Review,
    Target,
    format_rating,
    inject,
    inject_record,
)
from xmpp_activity.core.constants import qname

ENTRY = qname(NS_ATOM, "entry")
IN_REPLY_TO = qname(NS_THREAD, "in-reply-to")
TARGET = qname(NS_ACTIVITY, "target")
RATING = qname(NS_REVIEW, "rating")


class TestInjectNoop:
    def test_no_data_attribute(self, atom_item):
        # Arrange
        original = ET.tostring(atom_item)

        # Act
        inject({}, atom_item)

        # Assert
        assert ET.tostring(atom_item) == original

    def test_unrelated_keys(self, atom_item):
        original = ET.tostring(atom_item)
        inject({"title": "hello", "author": {"name": "lloyd"}}, atom_item)
        assert ET.tostring(atom_item) == original

    def test_no_atom_namespace(self):
        # Arrange
        stanza = ET.fromstring("<item><entry/></item>")
        original = ET.tostring(stanza)

        # Act
        inject({"in-reply-to": {}}, stanza)

        # Assert
        assert ET.tostring(stanza) == original

    @pytest.mark.parametrize("namespace", [NS_THREAD, NS_REVIEW, NS_ACTIVITY])
    def test_extension_namespaced_entry(self, make_item, namespace):
        stanza = make_item(namespace)
        original = ET.tostring(stanza)
        inject({"in-reply-to": {"ref": "r"}, "review": {"rating": 1}}, stanza)
        assert ET.tostring(stanza) == original

    def test_no_entry(self):
        stanza = ET.fromstring("<item/>")
        inject({"target": {"id": "i", "object-type": "o"}}, stanza)
        assert len(stanza) == 0


class TestInjectThread:
    def test_adds_namespace_to_parent_element(self, atom_item):
        inject({"in-reply-to": {}}, atom_item)
        entry = atom_item.find(ENTRY)
        assert entry.get(f"xmlns:{PREFIX_NS_THREAD}") == NS_THREAD

    def test_empty_mapping_still_adds_element(self, atom_item):
        inject({"in-reply-to": {}}, atom_item)
        in_reply_to = atom_item.find(ENTRY).find(IN_REPLY_TO)
        assert in_reply_to is not None
        assert dict(in_reply_to.attrib) == {}

    def test_adds_expected_in_reply_to_element(self, atom_item):
        # Arrange
        entry = {
            "in-reply-to": {
                "ref": "tag:xmpp-ftw,2013:10",
                "type": "application/xhtml+xml",
                "href": "http://evilprofessor.co.uk/entires/1",
            }
        }

        # Act
        inject(entry, atom_item)

        # Assert
        in_reply_to = atom_item.find(ENTRY).find(IN_REPLY_TO)
        assert in_reply_to is not None
        assert in_reply_to.get("ref") == entry["in-reply-to"]["ref"]
        assert in_reply_to.get("type") == entry["in-reply-to"]["type"]
        assert in_reply_to.get("href") == entry["in-reply-to"]["href"]

    def test_absent_fields_omitted(self, atom_item):
        inject({"in-reply-to": {"href": "http://example.com/1", "ref": None}}, atom_item)
        in_reply_to = atom_item.find(ENTRY).find(IN_REPLY_TO)
        assert dict(in_reply_to.attrib) == {"href": "http://example.com/1"}

    def test_empty_string_fields_kept(self, atom_item):
        inject({"in-reply-to": {"ref": "", "type": "t"}}, atom_item)
        in_reply_to = atom_item.find(ENTRY).find(IN_REPLY_TO)
        assert dict(in_reply_to.attrib) == {"ref": "", "type": "t"}

    def test_repeat_injection_is_idempotent_on_declaration(self, atom_item):
        inject({"in-reply-to": {"ref": "a"}}, atom_item)
        inject({"in-reply-to": {"ref": "b"}}, atom_item)
        entry = atom_item.find(ENTRY)
        assert entry.get("xmlns:thr") == NS_THREAD
        assert [e.get("ref") for e in entry.findall(IN_REPLY_TO)] == ["a", "b"]


class TestInjectTarget:
    def test_adds_target_element_and_namespace(self, atom_item):
        # Arrange
        entry = {
            "target": {
                "id": "tag:xmpp-ftw.jit.su,news,item-20130113",
                "object-type": "comment",
            }
        }

        # Act
        inject(entry, atom_item)

        # Assert
        entry_elem = atom_item.find(ENTRY)
        assert entry_elem.get(f"xmlns:{PREFIX_NS_ACTIVITY}") == NS_ACTIVITY
        target = entry_elem.find(TARGET)
        assert target is not None
        assert target.findtext(qname(NS_ATOM, "id")) == entry["target"]["id"]
        assert target.findtext(qname(NS_ACTIVITY, "object-type")) == entry["target"]["object-type"]

    def test_children_written_without_values(self, atom_item):
        inject({"target": {}}, atom_item)
        target = atom_item.find(ENTRY).find(TARGET)
        assert [child.tag for child in target] == [qname(NS_ATOM, "id"), qname(NS_ACTIVITY, "object-type")]
        assert all(child.text is None for child in target)


class TestInjectReview:
    def test_adds_rating_element_and_namespace(self, atom_item):
        # Arrange
        entry = {"review": {"rating": 5}}

        # Act
        inject(entry, atom_item)

        # Assert
        entry_elem = atom_item.find(ENTRY)
        assert entry_elem.get(f"xmlns:{PREFIX_NS_REVIEW}") == NS_REVIEW
        rating = entry_elem.find(RATING)
        assert rating is not None
        assert rating.text == "5"

    def test_integral_float_rating(self, atom_item):
        inject({"review": {"rating": 4.0}}, atom_item)
        assert atom_item.find(ENTRY).findtext(RATING) == "4"

    def test_missing_rating_leaves_empty_element(self, atom_item):
        inject({"review": {}}, atom_item)
        rating = atom_item.find(ENTRY).find(RATING)
        assert rating is not None
        assert rating.text is None


class TestInjectAll:
    def test_all_extensions_in_order(self, atom_item):
        # Arrange
        record = {
            "review": {"rating": 3},
            "target": {"id": "i", "object-type": "o"},
            "in-reply-to": {"ref": "r"},
        }

        # Act
        inject(record, atom_item)

        # Assert
        entry = atom_item.find(ENTRY)
        assert [child.tag for child in entry] == [IN_REPLY_TO, TARGET, RATING]
        assert entry.get("xmlns:thr") == NS_THREAD
        assert entry.get("xmlns:activity") == NS_ACTIVITY
        assert entry.get("xmlns:review") == NS_REVIEW

    def test_record_not_modified(self, atom_item):
        record = {"in-reply-to": {"ref": "r"}}
        inject(record, atom_item)
        assert record == {"in-reply-to": {"ref": "r"}}


class TestInjectStanza:
    def test_pubsub_item(self):
        # Arrange
        item = Item()
        item.xml.append(ET.Element(ENTRY))

        # Act
        inject({"review": {"rating": 2.5}}, item)

        # Assert
        assert item.xml.find(ENTRY).findtext(RATING) == "2.5"

    def test_inject_record(self, atom_item):
        record = ActivityRecord(
            in_reply_to=InReplyTo(ref="r", href="h"),
            target=Target(id="i", object_type="o"),
            review=Review(rating=1.0),
        )
        inject_record(record, atom_item)
        entry = atom_item.find(ENTRY)
        assert dict(entry.find(IN_REPLY_TO).attrib) == {"ref": "r", "href": "h"}
        assert entry.find(TARGET).findtext(qname(NS_ATOM, "id")) == "i"
        assert entry.findtext(RATING) == "1"

    def test_inject_empty_record(self, atom_item):
        original = ET.tostring(atom_item)
        inject_record(ActivityRecord(), atom_item)
        assert ET.tostring(atom_item) == original


class TestFormatRating:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, "5"), (5.0, "5"), (4.5, "4.5"), (-0.0, "0"), (0.1, "0.1"), ("7", "7")],
    )
    def test_canonical_form(self, value, expected):
        assert format_rating(value) == expected
