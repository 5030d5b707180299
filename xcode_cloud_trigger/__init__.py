"""Trigger Xcode Cloud builds through the App Store Connect API."""

import logging

from xcode_cloud_trigger.models.schemas.app_store_connect import TriggerResult
from xcode_cloud_trigger.services.build_trigger import BuildTriggerService, trigger

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["BuildTriggerService", "TriggerResult", "trigger"]
