# Feedback Assistant
# Writing feedback (clarity, tone, improvements) from Claude or local heuristics

import sys
import os
from datetime import datetime, timezone

# Add parent directory to path for feedback_core imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify, send_from_directory
from flask_cors import CORS

from feedback_core import (
    SERVICE_NAME,
    SERVICE_VERSION,
    MAX_CONTENT_LENGTH,
    FeedbackHandler,
    ValidationError,
    create_provider,
    load_settings
)
from feedback_core.config import DEFAULT_LANGUAGE


def create_app(settings=None, handler=None):
    """Build the Flask app.

    Args:
        settings: Settings; read from the environment when omitted
        handler: FeedbackHandler; built from settings when omitted
    """
    settings = settings or load_settings()
    handler = handler or FeedbackHandler(settings, provider=create_provider(settings))

    app = Flask(__name__, static_folder='static')
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
    CORS(app)

    @app.route('/api/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'ok',
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
            'ai_available': handler.ai_available,
            'timestamp': datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        })

    @app.route('/api/feedback', methods=['POST'])
    def feedback():
        """Generate writing feedback.

        Accepts:
            - text: The writing to review (at least 10 characters)
            - language: Language for the feedback (optional, defaults to English)

        Returns:
            - clarity, tone, improvement: Feedback sections
            - stats: Word, character and sentence counts plus reading time
            - mode: ai, demo, demo_fallback or error_fallback
            - error_message: Only for error_fallback
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        text = data.get('text')
        language = data.get('language', DEFAULT_LANGUAGE)

        try:
            return jsonify(handler.handle(text, language))

        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            print(f"API Error: {e}")

            # Fall back to heuristics whenever there is text to work with
            if isinstance(text, str) and text.strip():
                return jsonify(handler.fallback(text, e))

            return jsonify({
                'error': 'Failed to generate feedback',
                'message': str(e),
                'mode': 'error'
            }), 500

    @app.route('/', defaults={'path': ''}, methods=['GET'])
    @app.route('/<path:path>', methods=['GET'])
    def index(path):
        """Serve the single-page client for all other routes"""
        return send_from_directory(app.static_folder, 'index.html')

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({'error': 'Request body too large'}), 413

    @app.errorhandler(500)
    def server_error(error):
        print(f"Server error: {error}")
        return jsonify({'error': 'Internal server error', 'mode': 'server_error'}), 500

    return app


def print_banner(settings):
    print(f"{SERVICE_NAME} started on port {settings.port}")
    print(f"Health: http://localhost:{settings.port}/api/health")
    if settings.ai_available:
        print(f"AI mode: enabled ({settings.model})")
    else:
        print("AI mode: demo (no Anthropic API key found)")
        print("Add ANTHROPIC_API_KEY to your .env file (or the environment) and restart to enable Claude feedback")


if __name__ == '__main__':
    settings = load_settings()
    app = create_app(settings)
    print_banner(settings)
    app.run(host='0.0.0.0', port=settings.port)
