"""Scheduling for repeat-mode syncs."""

from nrtksync.scheduler.loop import RepeatLoop

__all__ = ["RepeatLoop"]
