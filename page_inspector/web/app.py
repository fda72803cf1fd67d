"""
Flask web application for the page inspector.

Provides a small web UI and a JSON API for inspecting pages.
"""

import asyncio

from flask import Flask, render_template, request, jsonify

from ..errors import InvalidUrlError, MainFetchError
from ..inspector import PageInspector
from ..utils.constants import MAX_REQUEST_BYTES
from ..utils.log import get_logger


def create_app(inspector: PageInspector = None):
    """
    Create and configure the Flask application.

    Args:
        inspector: PageInspector used for requests (default settings if omitted)
    """
    app = Flask(__name__,
                template_folder='templates')
    app.config['MAX_CONTENT_LENGTH'] = MAX_REQUEST_BYTES

    app.inspector = inspector or PageInspector()
    logger = get_logger("web")

    @app.route('/')
    def index():
        """Render the main UI page."""
        return render_template('index.html')

    @app.route('/health')
    def health():
        return 'ok'

    @app.route('/api/inspect', methods=['POST'])
    def inspect():
        """Inspect the page given in the JSON body."""
        data = request.get_json(silent=True) or {}
        url = data.get('url') if isinstance(data, dict) else None
        if not isinstance(url, str) or not url.strip():
            return jsonify({'error': 'Missing url in body'}), 400

        try:
            report = asyncio.run(app.inspector.inspect(url))
        except InvalidUrlError as e:
            return jsonify({'error': str(e)}), 400
        except MainFetchError as e:
            return jsonify({
                'error': 'Failed to fetch target URL',
                'detail': e.detail
            }), 502
        except Exception as e:
            logger.exception(f"Inspection of {url} failed")
            return jsonify({'error': 'Internal error', 'detail': str(e)}), 500

        return jsonify(report.to_dict())

    return app


def run_app(host: str = '0.0.0.0', port: int = 3000, debug: bool = False):
    """Run the Flask web application."""
    app = create_app()
    get_logger("web").info(f"Page inspector listening on {port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_app()
