"""Activity Streams extensions for XMPP pubsub Atom entries."""

from xmpp_activity.core.constants import (
    NS_ACTIVITY,
    NS_ATOM,
    NS_REVIEW,
    NS_THREAD,
    PREFIX_NS_ACTIVITY,
    PREFIX_NS_REVIEW,
    PREFIX_NS_THREAD,
)
from xmpp_activity.core.errors import ActivityConfigurationError, ActivityError, MalformedRatingError
from xmpp_activity.extractor import extract, extract_record
from xmpp_activity.injector import format_rating, inject, inject_record
from xmpp_activity.record import ActivityRecord, InReplyTo, Review, Target

__version__ = "0.1.0"

# parse/build naming used by stanza handlers.
parse = extract
build = inject

__all__ = [
    "NS_ACTIVITY",
    "NS_ATOM",
    "NS_REVIEW",
    "NS_THREAD",
    "PREFIX_NS_ACTIVITY",
    "PREFIX_NS_REVIEW",
    "PREFIX_NS_THREAD",
    "ActivityConfigurationError",
    "ActivityError",
    "ActivityRecord",
    "InReplyTo",
    "MalformedRatingError",
    "Review",
    "Target",
    "__version__",
    "build",
    "extract",
    "extract_record",
    "format_rating",
    "inject",
    "inject_record",
    "parse",
]
