"""
RSS 2.0 rendering for DiffFeed.

Turns a FeedHistory into a feed document, newest event first. Text
nodes and attributes are XML-escaped; item descriptions are HTML carried
in CDATA sections.
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime
from xml.sax.saxutils import escape, quoteattr

from difffeed import __version__
from difffeed.core.change_event import ChangeEvent
from difffeed.core.config import FeedConfig
from difffeed.core.feed_history import FeedHistory

GENERATOR = f"DiffFeed/{__version__}"

CONTENT_NAMESPACE = "http://purl.org/rss/1.0/modules/content/"

# Line-break marker between files in an item description
LINE_BREAK = "<br/>\n"

# Characters outside the XML 1.0 Char production, lone surrogates included
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _clean(text: str) -> str:
    """Replace characters that cannot appear in an XML document."""
    return _INVALID_XML_CHARS.sub("\ufffd", text)


def _text(value: str) -> str:
    return escape(_clean(value))


def _cdata(value: str) -> str:
    # A literal "]]>" would close the section early
    return "<![CDATA[" + _clean(value).replace("]]>", "]]]]><![CDATA[>") + "]]>"


def format_rfc822(value: datetime) -> str:
    """Format a timestamp the way RSS pubDate elements expect."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


class FeedRenderer:
    """
    Renders a FeedHistory as an RSS 2.0 document.

    The feed title, link, description and language come from the
    FeedConfig passed to the constructor.
    """

    def __init__(self, config: FeedConfig):
        self._config = config

    def render(self, history: FeedHistory) -> str:
        """Render the channel and one item per retained event, newest first."""
        config = self._config
        items = "".join(self.render_item(event) for event in reversed(history.events))

        return (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<rss version="2.0" xmlns:content={quoteattr(CONTENT_NAMESPACE)}>\n'
            "  <channel>\n"
            f"    <title>{_text(config.title)}</title>\n"
            f"    <link>{_text(config.link)}</link>\n"
            f"    <description>{_text(config.effective_description)}</description>\n"
            f"    <pubDate>{format_rfc822(history.last_update_time())}</pubDate>\n"
            f"    <generator>{_text(GENERATOR)}</generator>\n"
            f"    <language>{_text(config.language)}</language>\n"
            "\n"
            f"{items}"
            "  </channel>\n"
            "</rss>\n"
        )

    def render_item(self, event: ChangeEvent) -> str:
        """Render a single event as an RSS item."""
        link = self._config.link
        body = LINE_BREAK.join(escape(line) for line in event.formatted_files())

        return (
            "    <item>\n"
            f"      <title>{_text(event.summary())}</title>\n"
            f"      <link>{_text(link)}</link>\n"
            f"      <pubDate>{format_rfc822(event.timestamp)}</pubDate>\n"
            f'      <guid isPermaLink="false">{_text(f"{link}#{event.epoch_seconds}")}</guid>\n'
            f"      <description>{_cdata(body)}</description>\n"
            "    </item>\n"
        )


def render(history: FeedHistory, config: FeedConfig) -> str:
    """Render a FeedHistory with the given feed settings."""
    return FeedRenderer(config).render(history)
