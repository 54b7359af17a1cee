#!/usr/bin/env python3
"""
Taiwan Market Proxy - CORS-friendly JSON for TWSE, Yahoo Finance and news feeds

Usage:
    python main.py --serve                          # Run the proxy on config.server.port
    python main.py --type twse_stock --codes 2330,2317
    python main.py --type twse_movers --date 20250220
    python main.py --type institutional
    python main.py --type yahoo --symbols ^GSPC,USDTWD=X
    python main.py --type rss --feed udn
"""
import argparse
import json
import sys

from twproxy.proxy import HANDLERS, dispatch
from twproxy.utils import get_logger

logger = get_logger("main")


def fetch_once(args) -> int:
    """Run one proxy request and print its JSON body."""
    params = {"type": args.type}
    for name in ("codes", "date", "symbols", "feed"):
        value = getattr(args, name)
        if value:
            params[name] = value

    logger.info(f"Fetching {params}")
    result = dispatch("GET", params)
    print(json.dumps(result.body, ensure_ascii=False, indent=2))
    return 0 if result.status == 200 else 1


def main():
    parser = argparse.ArgumentParser(description="Taiwan Market Proxy")
    parser.add_argument("--serve", action="store_true", help="Run the proxy web server")
    parser.add_argument("--type", choices=list(HANDLERS), help="Fetch one response and print it")
    parser.add_argument("--codes", help="Comma-separated TWSE codes (twse_stock)")
    parser.add_argument("--date", help="YYYYMMDD (twse_movers, institutional)")
    parser.add_argument("--symbols", help="Comma-separated Yahoo symbols (yahoo)")
    parser.add_argument("--feed", help="Feed name (rss)")

    args = parser.parse_args()

    if args.serve:
        from web.app import main as serve
        serve()
    elif args.type:
        sys.exit(fetch_once(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
