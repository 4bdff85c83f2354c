"""Pathwise: Flask application entry point."""
import logging
import logging.handlers
import os
import traceback

from flask import Flask, jsonify, request as flask_request
from werkzeug.exceptions import HTTPException

from config.settings import DEBUG, SECRET_KEY
from routes.home import home_bp
from routes.api import api_bp

# --- File logging with daily rotation, 3-day retention ---
LOG_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'pathwise_debug.log')

file_handler = logging.handlers.TimedRotatingFileHandler(
    LOG_FILE, when='midnight', backupCount=3, encoding='utf-8',
)
file_handler.setLevel(logging.DEBUG)
file_handler.setFormatter(logging.Formatter(
    '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[logging.StreamHandler(), file_handler],
)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Content-Security-Policy': ("default-src 'self'; style-src 'self' 'unsafe-inline'; "
                                "img-src 'self' data:"),
}


def create_app():
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    app.config['DEBUG_ERRORS'] = DEBUG

    app.register_blueprint(home_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    # --- Request/response logging ---
    req_logger = logging.getLogger('pathwise.requests')

    @app.before_request
    def log_request():
        req_logger.info('>>> %s %s  bytes=%s', flask_request.method,
                        flask_request.full_path.rstrip('?'),
                        flask_request.content_length or 0)

    @app.after_request
    def log_response(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        req_logger.info('<<< %s %s  status=%d',
                        flask_request.method,
                        flask_request.full_path.rstrip('?'),
                        response.status_code)
        return response

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def log_error(error):
        details = traceback.format_exc()
        req_logger.error('!!! %s %s  EXCEPTION:\n%s',
                         flask_request.method,
                         flask_request.full_path.rstrip('?'),
                         details)
        body = {'error': 'Internal Server Error'}
        if app.config.get('DEBUG_ERRORS'):
            body['details'] = details
        return jsonify(body), 500

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=DEBUG, host='0.0.0.0', port=int(os.environ.get('PORT', 5002)),
            threaded=True)
