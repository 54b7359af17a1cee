"""Fake responses and builders for upstream payloads."""
import requests

_NO_JSON = object()


class FakeResponse:
    """Stand-in for requests.Response carrying a canned payload."""

    def __init__(self, payload=_NO_JSON, text="", status_code=200, headers=None):
        self._payload = payload
        self.text = text
        self.status_code = status_code
        self.headers = headers or {}
        self.encoding = None

    def json(self):
        if self._payload is _NO_JSON:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


def mis_item(code="2330", name="台積電", z="1000.00", y="990.00", **extra):
    item = {"c": code, "n": name, "z": z, "y": y, "o": "995.00", "h": "1005.00",
            "l": "985.00", "v": "23456", "t": "13:30:00"}
    item.update(extra)
    return item


def movers_row(code, name, close, sign, pts, volume="1,234,567"):
    return [code, name, volume, "999,999", "0", "0", "0", close, sign, pts]


def t86_row(code, name, foreign, trust=0, dealer=0, total=None):
    total = foreign + trust + dealer if total is None else total
    row = [code, name] + ["0"] * 17
    row[4] = f"{foreign:,}"
    row[10] = f"{trust:,}"
    row[11] = f"{dealer:,}"
    row[18] = f"{total:,}"
    return row
