"""Common utilities for the shlack client."""
from .config import get_config, configure_logger, resolve_host

__all__ = ['get_config', 'configure_logger', 'resolve_host']
