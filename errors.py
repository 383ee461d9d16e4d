"""
errors.py — Error taxonomy and the single error-reporting channel.

Malformed descriptions and failed loads are reported through ``emit()``,
which logs the message and raises.  Nothing is recovered silently: the
operation that hit the problem is aborted.
"""

import logging

logger = logging.getLogger(__name__)


class FSMError(Exception):
    """Base class for everything this package raises."""


class FSMDescriptionError(FSMError, ValueError):
    """The FSM description is malformed or refers to unknown names."""


class FSMLoadError(FSMError):
    """The FSM description could not be fetched or parsed."""


def emit(message: str, error_type: type[FSMError] = FSMDescriptionError):
    """Report *message* and abort the current operation.

    Raises
    ------
    FSMError
        Always; an instance of *error_type* carrying *message*.
    """
    logger.error(message)
    raise error_type(message)
