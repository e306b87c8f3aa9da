# Feedback Assistant Core
# Text statistics, heuristic feedback and the Claude-backed request handler

from .config import (
    SERVICE_NAME,
    SERVICE_VERSION,
    MAX_CONTENT_LENGTH,
    Settings,
    load_settings
)

from .helpers import (
    strip_markdown_json,
    extract_json_object,
    format_reading_time
)

from .stats import compute_stats

from .heuristics import (
    generate_mock_feedback,
    generate_revised_excerpt
)

from .claude import (
    ClaudeProvider,
    create_provider
)

from .service import (
    FeedbackHandler,
    FeedbackParseError,
    ValidationError,
    parse_feedback_response,
    validate_text
)
