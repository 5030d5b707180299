import logging

from xcode_cloud_trigger.utils.logging.redaction import redact_text, redact_value


class Logger:
    """
    Redacting logger wrapper.

    Wraps a standard library logger and provides methods for the different
    logging levels. Every message and extra payload is redacted before it
    reaches the underlying logger, so a bearer token can never be emitted
    through this class regardless of what the caller passes in.

    Args:
        name (str): The name of the logger instance
        request_context (dict, optional): Context merged into every log entry
    """

    def __init__(self, name: str, request_context: dict = None):
        self.base_logger: logging.Logger = logging.getLogger(name)
        self.request_context = request_context

    def __add_request_context_to_extra(self, extra: dict) -> dict:
        """
        Merges the request context with additional extra information and
        redacts the result.

        Args:
            extra (dict): Additional context information to be added to the log

        Returns:
            dict: Redacted merge of request context and extra information
        """
        if not extra:
            merged = self.request_context
        elif not self.request_context:
            merged = extra
        else:
            merged = extra.copy()
            merged.update(self.request_context)

        if not merged:
            return None
        return redact_value(dict(merged))

    def bind(self, **context) -> "Logger":
        """Return a logger for the same name with extra request context."""
        merged = dict(self.request_context or {})
        merged.update(context)
        return Logger(self.base_logger.name, merged)

    def debug(self, message, extra=None):
        """
        Log a message with DEBUG level.

        Args:
            message: The message to be logged
            extra (dict, optional): Additional context information for this log entry
        """
        self.base_logger.debug(
            redact_text(str(message)), extra=self.__add_request_context_to_extra(extra)
        )

    def info(self, message, extra=None):
        """
        Log a message with INFO level.

        Args:
            message: The message to be logged
            extra (dict, optional): Additional context information for this log entry
        """
        self.base_logger.info(
            redact_text(str(message)), extra=self.__add_request_context_to_extra(extra)
        )

    def warning(self, message, extra=None):
        """Log a redacted message with WARNING level."""
        self.base_logger.warning(
            redact_text(str(message)), extra=self.__add_request_context_to_extra(extra)
        )

    def error(self, message, extra=None):
        """Log a redacted message with ERROR level."""
        self.base_logger.error(
            redact_text(str(message)), extra=self.__add_request_context_to_extra(extra)
        )
