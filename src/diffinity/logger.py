"""Logging helper for diffinity.

Wraps the standard library logging so every module logs under the
"diffinity." namespace. The library never installs handlers; applications
configure logging themselves.
"""

import logging


def get_logger(name: str) -> logging.Logger:
    """
    Return a standard library logger prefixed with "diffinity.".

    >>> get_logger("source").name
    'diffinity.source'
    """
    if not (name == "diffinity" or name.startswith("diffinity.")):
        name = f"diffinity.{name}"
    return logging.getLogger(name)
