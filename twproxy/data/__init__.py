from .models import Quote, ExternalQuote, MoverRow, InstitutionalRow, FeedItem
from .twse_fetcher import TWSEFetcher
from .yahoo_fetcher import YahooFetcher
from .rss_reader import RSSReader

__all__ = [
    "Quote",
    "ExternalQuote",
    "MoverRow",
    "InstitutionalRow",
    "FeedItem",
    "TWSEFetcher",
    "YahooFetcher",
    "RSSReader",
]
