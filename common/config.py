#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import json
import logging

from shlack.error import ConfigError


DEFAULTS = {
    'host': '127.0.0.1',
    'port': 4040,
    'username': None,
    'default_channel': 'lobby',
    'divider_length': 35,
    'log_level': 'warning',
    'log_file': None,
    'log_format': '[%(asctime).19s] [%(name)s] [%(levelname)s] %(message)s',
    'colors': {}
}


class RobustFileHandler(logging.FileHandler):
    """FileHandler that gracefully handles flush errors on Windows"""

    def flush(self):
        """Flush the stream, catching OSError on Windows file handles"""
        try:
            super().flush()
        except OSError as e:
            # Windows can fail to flush with "Invalid argument" when the
            # file handle is in an inconsistent state
            if e.errno != 22:  # EINVAL
                raise


def configure_logger(logger,
                     log_file=None,
                     log_format=None,
                     log_level=logging.INFO):
    """Configure a logger with a file or stream handler

    Args:
        logger: Logger instance or logger name string
        log_file: File path string or file-like object (None for stderr)
        log_format: Format string for log messages
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)

    Returns:
        Configured logger instance
    """
    # Create file handler if path string, otherwise stream handler
    if isinstance(log_file, str):
        handler = RobustFileHandler(
            log_file,
            mode='a',
            encoding='utf-8',
            errors='replace'
        )
    else:
        handler = logging.StreamHandler(log_file)  # Default to stderr if None

    formatter = logging.Formatter(log_format)

    # Get logger by name if string provided
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(log_level)

    return logger


def get_log_level(name):
    """Convert a level name from the config to a logging constant

    Args:
        name: Level name such as 'info' or 'DEBUG'

    Raises:
        ConfigError: If the name is not a logging level
    """
    level = getattr(logging, str(name).upper(), None)
    if not isinstance(level, int):
        raise ConfigError('invalid log level: %r' % (name,))
    return level


def resolve_host(entered, default):
    """Return the host typed at the prompt, or the default if blank"""
    entered = entered.strip()
    return entered or default


def get_config(path=None, **overrides):
    """Load configuration from an optional JSON file

    Values missing from the file are taken from DEFAULTS. Keyword
    arguments that are not None override both.

    Args:
        path: Path to a JSON config file, or None for defaults only
        **overrides: Values from the command line

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file cannot be read or has invalid values
    """
    conf = dict(DEFAULTS)

    if path is not None:
        try:
            with open(path, 'r', encoding='utf-8') as fp:
                loaded = json.load(fp)
        except OSError as ex:
            raise ConfigError('cannot read config %s: %s' % (path, ex)) from ex
        except ValueError as ex:
            raise ConfigError('invalid JSON in %s: %s' % (path, ex)) from ex
        if not isinstance(loaded, dict):
            raise ConfigError('config %s must be a JSON object' % path)
        conf.update(loaded)

    conf.update({k: v for k, v in overrides.items() if v is not None})

    # Port may be given as a string in the file
    try:
        conf['port'] = int(conf['port'])
    except (TypeError, ValueError) as ex:
        raise ConfigError('invalid port: %r' % (conf['port'],)) from ex
    if not 0 <= conf['port'] <= 65535:
        raise ConfigError('port out of range: %d' % conf['port'])

    try:
        conf['divider_length'] = int(conf['divider_length'])
    except (TypeError, ValueError) as ex:
        raise ConfigError(
            'invalid divider_length: %r' % (conf['divider_length'],)
        ) from ex

    if not isinstance(conf['colors'], dict):
        raise ConfigError('colors must be a JSON object')
    conf['colors'] = dict(conf['colors'])

    # Validate early so a typo fails before connecting
    get_log_level(conf['log_level'])

    return conf
