"""Request routing for the market data proxy."""
import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ..data import RSSReader, TWSEFetcher, YahooFetcher
from ..data.parsing import now_ms
from ..errors import ProxyError
from ..utils import get_logger

logger = get_logger(__name__)

CORS_HEADERS = MappingProxyType({
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json; charset=utf-8",
})


@dataclass(frozen=True)
class ProxyResponse:
    status: int
    body: Optional[dict]


def render(response: ProxyResponse) -> bytes:
    """Serialize a response body; pre-flight responses have none."""
    if response.body is None:
        return b""
    return json.dumps(response.body, ensure_ascii=False).encode("utf-8")


# Handlers

def twse_stock(params: Mapping[str, str]) -> dict:
    """?type=twse_stock&codes=2330,2317,2454"""
    quotes = TWSEFetcher().get_stock_quotes(params.get("codes") or "")
    return {"stocks": {code: q.to_dict() for code, q in quotes.items()}, "ts": now_ms()}


def twse_index(params: Mapping[str, str]) -> dict:
    """?type=twse_index"""
    q = TWSEFetcher().get_index_quote()
    return {
        "price": q.price,
        "prev": q.prev,
        "change": q.change,
        "changePct": q.change_pct,
        "time": q.time,
        "ts": now_ms(),
    }


def twse_movers(params: Mapping[str, str]) -> dict:
    """?type=twse_movers&date=20250220"""
    rows, date = TWSEFetcher().get_movers(params.get("date"))
    return {"stocks": [r.to_dict() for r in rows], "date": date, "ts": now_ms()}


def institutional(params: Mapping[str, str]) -> dict:
    """?type=institutional&date=20250220"""
    flows = TWSEFetcher().get_institutional(params.get("date"))
    return {
        "topBuy": [r.to_dict() for r in flows["top_buy"]],
        "topSell": [r.to_dict() for r in flows["top_sell"]],
        "topTotal": [r.to_dict() for r in flows["top_total"]],
        "totalNetBuy": flows["total_net_buy"],
        "totalNetSell": flows["total_net_sell"],
        "date": flows["date"],
        "ts": now_ms(),
    }


def yahoo(params: Mapping[str, str]) -> dict:
    """?type=yahoo&symbols=^GSPC,^IXIC,USDTWD=X,CL=F"""
    quotes, source = YahooFetcher().get_quotes(params.get("symbols"))
    return {
        "result": {symbol: q.to_dict() for symbol, q in quotes.items()},
        "source": source,
        "ts": now_ms(),
    }


def rss(params: Mapping[str, str]) -> dict:
    """?type=rss&feed=cnyes  (cnyes | udn | chinatimes | moneydj)"""
    feed = params.get("feed") or "cnyes"
    items = RSSReader().get_items(feed)
    return {"items": [i.to_dict() for i in items], "feed": feed, "ts": now_ms()}


HANDLERS: Mapping[str, Callable[[Mapping[str, str]], dict]] = MappingProxyType({
    "twse_stock": twse_stock,
    "twse_index": twse_index,
    "twse_movers": twse_movers,
    "institutional": institutional,
    "yahoo": yahoo,
    "rss": rss,
})


def dispatch(method: str, params: Mapping[str, Any]) -> ProxyResponse:
    """
    Route one proxy request to its handler.

    Args:
        method: HTTP method; OPTIONS is answered without touching upstreams
        params: Query parameters, one value per name

    Returns:
        ProxyResponse with the status and JSON body to send
    """
    if method.upper() == "OPTIONS":
        return ProxyResponse(200, None)

    kind = params.get("type")
    handler = HANDLERS.get(kind)
    if handler is None:
        return ProxyResponse(400, {"error": f"Unknown type. Use: {', '.join(HANDLERS)}"})

    try:
        return ProxyResponse(200, handler(params))
    except ProxyError as e:
        logger.warning(f"{kind}: {e.message} ({e.status})")
        return ProxyResponse(e.status, e.to_dict())
    except Exception as e:
        logger.exception(f"{kind} failed: {e}")
        return ProxyResponse(500, {"error": str(e)})
