"""Logging utility for geodetics"""

__all__ = ['LOGGER', 'reset_warnings', 'warn_once']

import logging

LOGGER = logging.getLogger('geodetics')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def warn_once(warning: str, *args):
    """
    Logs an advisory warning the first time a given message template is seen.

    Args:
        warning:
            The message template (printf-style)

        *args:
            Values interpolated into the template by the logging framework

    Returns:
        None
    """
    if warning not in _WARNINGS:
        LOGGER.warning(warning, *args)
        _WARNINGS.add(warning)


def reset_warnings():
    """Forget which advisories have already been emitted"""
    _WARNINGS.clear()
