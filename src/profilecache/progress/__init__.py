"""Progress display adapters."""

from profilecache.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
