"""Market proxy endpoint for Vercel serverless."""
from http.server import BaseHTTPRequestHandler
import sys
from pathlib import Path
from urllib.parse import urlparse, parse_qs

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from twproxy.proxy import CORS_HEADERS, dispatch, render


class handler(BaseHTTPRequestHandler):
    def _respond(self, method):
        parsed = urlparse(self.path)
        params = {k: v[0] for k, v in parse_qs(parsed.query).items()}

        result = dispatch(method, params)
        body = render(result)

        self.send_response(result.status)
        for name, value in CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        self._respond('GET')

    def do_OPTIONS(self):
        self._respond('OPTIONS')
