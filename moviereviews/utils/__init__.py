"""
Shared utilities package.

This package contains logging configuration used across the application
and scripts.
"""

from moviereviews.utils.logging_config import configure_api_logging, get_logger, setup_logging

__all__ = ['setup_logging', 'configure_api_logging', 'get_logger']
