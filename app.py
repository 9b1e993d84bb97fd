"""
EventStream Web Interface - Flask Application
"""
from flask import Flask, jsonify

from eventstream import __version__
from eventstream.config import config
from eventstream.routes.errors import register_error_handlers
from eventstream.routes.sse import sse_bp

app = Flask(__name__)

app.register_blueprint(sse_bp)
register_error_handlers(app)


@app.route('/health')
def health():
    """Liveness probe"""
    return jsonify({
        'status': 'ok',
        'version': __version__,
        'framing_policy': config.framing_policy().value
    })


if __name__ == '__main__':
    from eventstream.utils.logger import setup_logging

    setup_logging()
    app.run(host=config.HOST, port=config.PORT, threaded=True)
