"""Observability infrastructure for structured logging."""

from spotify_web_api.infrastructure.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_correlation_id",
    "set_correlation_id",
]
