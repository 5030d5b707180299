"""
Build Trigger Package

Orchestrates workflow, git reference and build run resolution into a
single trigger operation.
"""

from xcode_cloud_trigger.services.build_trigger.trigger_service import (
    BuildTriggerService,
    trigger,
)

__all__ = ["BuildTriggerService", "trigger"]
