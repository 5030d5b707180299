__all__ = [
    "Logger",
    "get_logger",
    "configure_logging",
    "ApiEventSink",
    "LoggingApiEventSink",
]

from xcode_cloud_trigger.utils.logging.default import Logger
from xcode_cloud_trigger.utils.logging.config import get_logger, configure_logging
from xcode_cloud_trigger.utils.logging.api_events import ApiEventSink, LoggingApiEventSink
