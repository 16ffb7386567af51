"""Logging filters that keep OAuth secrets out of log records.

httpx logs every request URL at INFO on the ``httpx`` logger. Those URLs carry
``client_secret`` (and ``code`` during the token exchange) in the query
string, so the client installs ``SecretMaskingFilter`` on that logger.
"""

import logging
from typing import Iterable

from github_browser.urls import mask_secrets


TRANSPORT_LOGGERS = ("httpx", "httpcore")


class SecretMaskingFilter(logging.Filter):
    """Rewrite a record's message with secret query values masked.

    The record is never dropped. Only records whose rendered message
    changes are rewritten; their ``args`` are cleared because the masked
    message is already rendered.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_secrets(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


def install_secret_filter(logger_names: Iterable[str] = TRANSPORT_LOGGERS) -> None:
    """Attach a SecretMaskingFilter to each named logger, once.

    Args:
        logger_names: Loggers to protect.
    """
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(f, SecretMaskingFilter) for f in target.filters):
            target.addFilter(SecretMaskingFilter())
