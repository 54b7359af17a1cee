"""RSS headline reader for Taiwanese financial news feeds."""
import re
from typing import Optional

import requests

from ..errors import BadRequest
from ..utils import config, get_logger
from .models import FeedItem
from .parsing import extract_cdata, extract_plain, extract_tag, strip_html

logger = get_logger(__name__)

ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item>", re.DOTALL)

# Highest priority first; feedburner keeps the publisher URL in origLink
LINK_EXTRACTORS = (
    lambda block: extract_plain(block, "feedburner:origLink"),
    lambda block: extract_cdata(block, "link"),
    lambda block: extract_plain(block, "link"),
    lambda block: extract_plain(block, "guid"),
)


def resolve_link(block: str) -> str:
    """First non-empty link candidate, or "" if it is not an http(s) URL."""
    link = next((v for v in (f(block) for f in LINK_EXTRACTORS) if v), "")
    return link if link.startswith("http") else ""


def parse_items(xml: str, source: str, max_items: int, desc_length: int) -> list[FeedItem]:
    items = []
    for match in ITEM_RE.finditer(xml):
        block = match.group(1)
        title = extract_tag(block, "title")
        if title:
            items.append(FeedItem(
                title=title,
                link=resolve_link(block),
                desc=strip_html(extract_tag(block, "description"))[:desc_length],
                pub_date=extract_tag(block, "pubDate"),
                source=source,
            ))
        if len(items) >= max_items:
            break
    return items


class RSSReader:
    """Fetch and trim one of the configured news feeds."""

    def __init__(self, timeout: Optional[float] = None):
        self.feeds = config.feeds
        self.timeout = timeout or config.http_timeout

    def get_items(self, feed: str = "cnyes") -> list[FeedItem]:
        url = self.feeds.get(feed)
        if not url:
            raise BadRequest("Unknown feed")

        logger.info(f"Fetching feed {feed}")
        resp = requests.get(
            url,
            headers={"User-Agent": config.user_agent, "Accept": "application/rss+xml, text/xml"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        # requests assumes latin-1 for text/* without a charset
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            resp.encoding = "utf-8"
        items = parse_items(resp.text, feed, config.rss_max_items, config.rss_desc_length)
        logger.info(f"Parsed {len(items)} items from {feed}")
        return items
