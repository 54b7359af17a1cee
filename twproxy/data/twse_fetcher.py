"""Taiwan Stock Exchange real-time and end-of-day fetcher."""
from typing import Optional

import pandas as pd
import requests

from ..errors import UpstreamUnavailable
from ..utils import config, get_logger
from .models import InstitutionalRow, MoverRow, Quote
from .parsing import prev_trading_day, strip_html, to_float, to_int, today_str

logger = get_logger(__name__)

TOP_N = 10

# STOCK_DAY_ALL: code, name, volume, value, open, high, low, close, sign, change
MOVER_COLUMNS = {0: "code", 1: "name", 2: "volume", 7: "close", 8: "change_sign", 9: "change_pts"}

# T86 (ALLBUT0999): foreign net excludes foreign dealers, total is all three classes
INSTITUTIONAL_COLUMNS = {0: "code", 1: "name", 4: "foreign", 10: "trust", 11: "dealer", 18: "total"}


def _table(rows: list, columns: dict[int, str]) -> pd.DataFrame:
    """Pick positional columns out of a ragged upstream table as stripped strings."""
    df = pd.DataFrame(rows).reindex(columns=list(columns))
    df = df.rename(columns=columns)
    for col in df.columns:
        df[col] = df[col].fillna("").astype(str).str.strip()
    return df


def _numeric(series: pd.Series) -> pd.Series:
    cleaned = series.str.replace(",", "", regex=False)
    return pd.to_numeric(cleaned, errors="coerce").fillna(0)


def _has_rows(payload) -> bool:
    """An empty data array still counts as a published dataset."""
    return isinstance(payload, dict) and isinstance(payload.get("data"), list)


def _is_settled(payload) -> bool:
    return _has_rows(payload) and payload.get("stat") == "OK"


class TWSEFetcher:
    """Fetch quotes and daily datasets from the Taiwan Stock Exchange."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or config.http_timeout

    def _get_json(self, url: str, params: dict, referer: str) -> dict:
        logger.info(f"GET {url} {params}")
        resp = requests.get(url, params=params, headers={"Referer": referer}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _mis_items(self, symbols: list[str]) -> list[dict]:
        params = {"ex_ch": "|".join(f"tse_{s}.tw" for s in symbols), "json": 1, "delay": 0}
        data = self._get_json(config.mis_quote_url, params, config.mis_referer)
        return data.get("msgArray") or []

    @staticmethod
    def _to_quote(item: dict) -> Quote:
        code = item.get("c", "")
        return Quote(
            code=code,
            name=item.get("n") or code,
            price=to_float(item.get("z")) or to_float(item.get("y")) or 0,
            prev=to_float(item.get("y")),
            open=to_float(item.get("o")),
            high=to_float(item.get("h")),
            low=to_float(item.get("l")),
            volume=to_int(item.get("v")),
            time=item.get("t") or "",
        )

    def get_stock_quotes(self, codes: str) -> dict[str, Quote]:
        """
        Fetch real-time quotes for comma-separated stock codes.

        Items with missing or placeholder numbers still come back, with 0 in
        place of the unparseable fields.
        """
        symbols = [c.strip() for c in codes.split(",") if c.strip()]
        quotes = {}
        for item in self._mis_items(symbols):
            quote = self._to_quote(item)
            quotes[quote.code] = quote
        logger.info(f"Fetched {len(quotes)} quotes")
        return quotes

    def get_index_quote(self) -> Quote:
        """Fetch the TAIEX composite index."""
        items = self._mis_items([config.index_symbol])
        if not items:
            raise UpstreamUnavailable("No index data")
        return self._to_quote(items[0])

    def _fetch_daily(self, url: str, date: Optional[str], extra: Optional[dict] = None) -> tuple[dict, str]:
        """
        Fetch a daily dataset, falling back once to the previous weekday.

        Returns:
            (payload, date actually used)
        """
        date = date or today_str()

        def fetch(d: str) -> dict:
            params = {"date": d, "response": "json", **(extra or {})}
            return self._get_json(url, params, config.twse_referer)

        data = fetch(date)
        if not _is_settled(data):
            prev = prev_trading_day(date)
            logger.warning(f"No settled data for {date}, retrying with {prev}")
            data = fetch(prev)
            date = prev

        if not _has_rows(data):
            raise UpstreamUnavailable("No data", date=date)
        return data, date

    def get_movers(self, date: Optional[str] = None) -> tuple[list[MoverRow], str]:
        """
        Fetch end-of-day prices for every listed stock.

        Returns:
            (rows with a code and positive close, date of the dataset)
        """
        try:
            data, date = self._fetch_daily(config.movers_url, date)
        except UpstreamUnavailable as e:
            raise UpstreamUnavailable("No movers data", **e.context) from e

        df = _table(data["data"], MOVER_COLUMNS)
        df["volume"] = _numeric(df["volume"]).astype("int64")
        df["close"] = _numeric(df["close"]).astype(float)
        df["change_pts"] = _numeric(df["change_pts"]).astype(float)
        # sign cells sometimes arrive wrapped in colour markup
        df["change_sign"] = df["change_sign"].map(strip_html)
        df = df[(df["code"] != "") & (df["close"] > 0)]

        rows = [
            MoverRow(
                code=r.code,
                name=r.name,
                volume=int(r.volume),
                close=float(r.close),
                change_sign=r.change_sign,
                change_pts=float(r.change_pts),
            )
            for r in df.itertuples(index=False)
        ]
        logger.info(f"Fetched {len(rows)} movers for {date}")
        return rows, date

    def get_institutional(self, date: Optional[str] = None) -> dict:
        """
        Fetch net buy/sell of the three institutional investor classes.

        Returns dict with keys:
        - top_buy: top 10 by foreign net, largest first
        - top_sell: 10 lowest foreign net, sorted ascending then reversed
        - top_total: top 10 by combined net
        - total_net_buy / total_net_sell: sums of positive / negative foreign net
        - date: date of the dataset
        """
        try:
            data, date = self._fetch_daily(
                config.institutional_url, date, {"selectType": "ALLBUT0999"}
            )
        except UpstreamUnavailable as e:
            raise UpstreamUnavailable("No institutional data", **e.context) from e

        df = _table(data["data"], INSTITUTIONAL_COLUMNS)
        for col in ("foreign", "trust", "dealer", "total"):
            df[col] = _numeric(df[col]).astype("int64")
        df = df[df["code"] != ""]

        def to_rows(frame: pd.DataFrame) -> list[InstitutionalRow]:
            return [
                InstitutionalRow(
                    code=r.code,
                    name=r.name,
                    foreign=int(r.foreign),
                    trust=int(r.trust),
                    dealer=int(r.dealer),
                    total=int(r.total),
                )
                for r in frame.itertuples(index=False)
            ]

        by_foreign_desc = df.sort_values("foreign", ascending=False, kind="mergesort")
        by_foreign_asc = df.sort_values("foreign", ascending=True, kind="mergesort")
        by_total_desc = df.sort_values("total", ascending=False, kind="mergesort")

        foreign = df["foreign"]
        logger.info(f"Fetched institutional flows for {len(df)} stocks on {date}")
        return {
            "top_buy": to_rows(by_foreign_desc.head(TOP_N)),
            "top_sell": to_rows(by_foreign_asc.head(TOP_N).iloc[::-1]),
            "top_total": to_rows(by_total_desc.head(TOP_N)),
            "total_net_buy": int(foreign[foreign > 0].sum()),
            "total_net_sell": int(foreign[foreign < 0].sum()),
            "date": date,
        }
