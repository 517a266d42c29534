"""Shared stanza builders for activity extension tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from xmpp_activity import NS_ACTIVITY, NS_ATOM, NS_REVIEW, NS_THREAD
from xmpp_activity.config import Config


def item_with_entry(namespace: str | None, body: str = "", declarations: str = "") -> ET.Element:
    """Parse ``<item><entry xmlns=namespace ...>body</entry></item>``."""
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return ET.fromstring(f"<item><entry{xmlns}{declarations}>{body}</entry></item>")


@pytest.fixture
def atom_item() -> ET.Element:
    """Empty Atom-namespaced entry inside an item."""
    return item_with_entry(NS_ATOM)


@pytest.fixture
def thread_item() -> ET.Element:
    return item_with_entry(
        NS_THREAD,
        '<thr:in-reply-to ref="tag:xmpp-ftw,2013:10" type="application/xhtml+xml" '
        'href="http://evilprofessor.co.uk/entries/1"/>',
        declarations=f' xmlns:thr="{NS_THREAD}"',
    )


@pytest.fixture
def target_item() -> ET.Element:
    return item_with_entry(
        NS_ATOM,
        "<activity:target>"
        "<id>tag:xmpp-ftw.jit.su,news,item-20130113</id>"
        "<activity:object-type>comment</activity:object-type>"
        "</activity:target>",
        declarations=f' xmlns:activity="{NS_ACTIVITY}"',
    )


@pytest.fixture
def review_item() -> ET.Element:
    return item_with_entry(
        NS_REVIEW,
        "<review:rating>5.0</review:rating>",
        declarations=f' xmlns:review="{NS_REVIEW}"',
    )


@pytest.fixture(autouse=True)
def default_config(monkeypatch: pytest.MonkeyPatch) -> Config:
    """Fresh fail-open config for every test."""
    monkeypatch.delenv("ACTIVITY_STRICT_RATING", raising=False)
    config = Config()
    monkeypatch.setattr("xmpp_activity.extractor.cfg", config)
    return config


@pytest.fixture
def make_item():
    """Factory for item/entry fixtures with a custom namespace and body."""
    return item_with_entry
