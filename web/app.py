"""
Market proxy web application
Serves the proxy router over Flask for local and container deployments.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, Response, jsonify, request

from twproxy.proxy import CORS_HEADERS, dispatch, render
from twproxy.utils import config, get_logger

logger = get_logger("web")

app = Flask(__name__)


@app.route('/', methods=['GET', 'OPTIONS'])
@app.route('/api/proxy', methods=['GET', 'OPTIONS'])
def proxy():
    """Proxy one upstream request selected by ?type=."""
    params = request.args.to_dict(flat=True)
    logger.debug(f"{request.method} {params}")
    result = dispatch(request.method, params)
    return Response(render(result), status=result.status, headers=dict(CORS_HEADERS))


@app.route('/healthz')
def healthz():
    return jsonify({'status': 'ok'})


def main():
    """Run the web application."""
    print("=" * 50)
    print("  Taiwan Market Proxy")
    print(f"  http://localhost:{config.server_port}")
    print("=" * 50)

    app.run(host=config.server_host, port=config.server_port, debug=False)


if __name__ == '__main__':
    main()
