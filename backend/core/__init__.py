# Core module exports
from core.config import settings, get_settings
from core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    generate_correlation_id,
    api_logger,
    engine_logger,
    speech_logger,
    typing_logger,
    content_logger,
    batch_logger,
)
