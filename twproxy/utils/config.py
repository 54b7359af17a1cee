"""Configuration management for the market proxy."""
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "config.yaml"

DEFAULT_FEEDS = {
    "cnyes": "https://feeds.feedburner.com/rsscnyes_cat_tw_stock",
    "udn": "https://udn.com/rssfeed/news/2/6641?ch=news",
    "chinatimes": "https://www.chinatimes.com/rss/stock.xml",
    "moneydj": "https://www.moneydj.com/rss/news.xml",
}

DEFAULT_YAHOO_ENDPOINTS = {
    "query1-v7": "https://query1.finance.yahoo.com/v7/finance/quote",
    "query2-v7": "https://query2.finance.yahoo.com/v7/finance/quote",
    "query1-v6": "https://query1.finance.yahoo.com/v6/finance/quote",
}


class Config:
    """Configuration singleton for the application."""

    _instance = None
    _config: dict = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        else:
            self._config = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    # Upstreams

    @property
    def mis_quote_url(self) -> str:
        return self.get("twse.mis_quote_url", "https://mis.twse.com.tw/stock/api/getStockInfo.jsp")

    @property
    def mis_referer(self) -> str:
        return self.get("twse.mis_referer", "https://mis.twse.com.tw/")

    @property
    def movers_url(self) -> str:
        return self.get("twse.movers_url", "https://www.twse.com.tw/rwd/zh/afterTrading/STOCK_DAY_ALL")

    @property
    def institutional_url(self) -> str:
        return self.get("twse.institutional_url", "https://www.twse.com.tw/rwd/zh/fund/T86")

    @property
    def twse_referer(self) -> str:
        return self.get("twse.referer", "https://www.twse.com.tw/")

    @property
    def index_symbol(self) -> str:
        return self.get("twse.index_symbol", "t00")

    @property
    def yahoo_endpoints(self) -> tuple[tuple[str, str], ...]:
        """Ordered (name, url) pairs tried by the external quotes handler."""
        endpoints = self.get("yahoo.endpoints", DEFAULT_YAHOO_ENDPOINTS)
        return tuple(endpoints.items())

    @property
    def yahoo_default_symbols(self) -> str:
        return self.get("yahoo.default_symbols", "^GSPC,^IXIC,^DJI,USDTWD=X")

    @property
    def feeds(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.get("rss.feeds", DEFAULT_FEEDS)))

    @property
    def rss_max_items(self) -> int:
        return int(self.get("rss.max_items", 12))

    @property
    def rss_desc_length(self) -> int:
        return int(self.get("rss.desc_length", 150))

    # HTTP

    @property
    def http_timeout(self) -> float:
        return float(self.get("http.timeout", 10))

    @property
    def user_agent(self) -> str:
        return self.get("http.user_agent", "Mozilla/5.0")

    # Server and logging

    @property
    def server_host(self) -> str:
        return self.get("server.host", "0.0.0.0")

    @property
    def server_port(self) -> int:
        return int(os.getenv("PORT", self.get("server.port", 8787)))

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", self.get("logging.level", "INFO")).upper()

    @property
    def log_to_file(self) -> bool:
        return bool(self.get("logging.file", False))


config = Config()
