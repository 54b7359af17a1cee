"""Per-request records returned by the fetchers."""
from dataclasses import dataclass

from .parsing import derive_change


@dataclass(frozen=True)
class Quote:
    """
    Normalized quote for one instrument.

    Attributes:
        code: Instrument code or external symbol
        name: Display name
        price: Last price, or the previous close when nothing traded yet
        prev: Previous close
        open/high/low/volume/time: Exchange quotes only
    """
    code: str
    name: str
    price: float
    prev: float
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    volume: int = 0
    time: str = ""

    @property
    def change(self) -> float:
        return derive_change(self.price, self.prev)[0]

    @property
    def change_pct(self) -> float:
        return derive_change(self.price, self.prev)[1]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changePct": self.change_pct,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "prev": self.prev,
            "volume": self.volume,
            "time": self.time,
        }


@dataclass(frozen=True)
class ExternalQuote:
    """Quote for an index, FX pair or commodity as reported upstream."""
    symbol: str
    name: str
    price: float
    change: float
    change_pct: float
    prev: float

    @classmethod
    def from_yahoo(cls, q: dict) -> "ExternalQuote":
        return cls(
            symbol=q["symbol"],
            name=q.get("shortName") or q["symbol"],
            price=round(q.get("regularMarketPrice") or 0, 2),
            change=round(q.get("regularMarketChange") or 0, 2),
            change_pct=round(q.get("regularMarketChangePercent") or 0, 2),
            prev=round(q.get("regularMarketPreviousClose") or 0, 2),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changePct": self.change_pct,
            "prev": self.prev,
        }


@dataclass(frozen=True)
class MoverRow:
    """One row of the end-of-day dataset with its signed change."""
    code: str
    name: str
    volume: int
    close: float
    change_sign: str
    change_pts: float

    @property
    def change(self) -> float:
        return -self.change_pts if self.change_sign == "-" else self.change_pts

    @property
    def change_pct(self) -> float:
        prev = self.close - self.change
        return round(self.change / prev * 100, 2) if prev > 0 else 0

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "volume": self.volume,
            "close": self.close,
            "changeSign": self.change_sign,
            "changePts": self.change_pts,
            "change": round(self.change, 2),
            "changePct": self.change_pct,
        }


@dataclass(frozen=True)
class InstitutionalRow:
    """Net shares traded by foreign investors, investment trusts and dealers."""
    code: str
    name: str
    foreign: int
    trust: int
    dealer: int
    total: int

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "foreign": self.foreign,
            "trust": self.trust,
            "dealer": self.dealer,
            "total": self.total,
        }


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    desc: str
    pub_date: str
    source: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "link": self.link,
            "desc": self.desc,
            "pubDate": self.pub_date,
            "source": self.source,
        }
