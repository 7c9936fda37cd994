"""Task orchestration."""

from .bat import Bat, failure_message

__all__ = ["Bat", "failure_message"]
