from job_tracker.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
