"""Yahoo Finance quote fetcher for indices, FX pairs and commodities."""
from typing import Optional

import requests

from ..errors import UpstreamUnavailable
from ..utils import config, get_logger
from .fallback import CandidatesExhausted, try_in_order
from .models import ExternalQuote

logger = get_logger(__name__)

FIELDS = ",".join([
    "regularMarketPrice",
    "regularMarketChange",
    "regularMarketChangePercent",
    "regularMarketPreviousClose",
    "shortName",
])


class YahooFetcher:
    """Fetch quotes from Yahoo Finance, trying each known endpoint in turn."""

    def __init__(self, endpoints: Optional[tuple[tuple[str, str], ...]] = None,
                 timeout: Optional[float] = None):
        self.endpoints = endpoints or config.yahoo_endpoints
        self.timeout = timeout or config.http_timeout

    def _fetch(self, endpoint: tuple[str, str], symbols: str) -> list[dict]:
        name, url = endpoint
        logger.info(f"Fetching {symbols} from {name}")
        resp = requests.get(
            url,
            params={"symbols": symbols, "fields": FIELDS},
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        # a 2xx body can still be null or a bare list
        response = data.get("quoteResponse") if isinstance(data, dict) else None
        result = response.get("result") if isinstance(response, dict) else None
        return result if isinstance(result, list) else []

    def get_quotes(self, symbols: Optional[str] = None) -> tuple[dict[str, ExternalQuote], str]:
        """
        Get current quotes for comma-separated Yahoo symbols.

        Args:
            symbols: e.g. "^GSPC,USDTWD=X,CL=F" (defaults from config)

        Returns:
            (quotes keyed by symbol, name of the endpoint that answered)
        """
        symbols = symbols or config.yahoo_default_symbols
        try:
            (name, _), results = try_in_order(
                self.endpoints, lambda ep: self._fetch(ep, symbols)
            )
        except CandidatesExhausted as e:
            logger.error(str(e))
            raise UpstreamUnavailable("All quote endpoints failed") from e

        quotes = {}
        for q in results:
            if not isinstance(q, dict) or not q.get("symbol"):
                logger.warning(f"Skipping result without symbol from {name}")
                continue
            quote = ExternalQuote.from_yahoo(q)
            quotes[quote.symbol] = quote
        logger.info(f"Fetched {len(quotes)} quotes from {name}")
        return quotes, name
