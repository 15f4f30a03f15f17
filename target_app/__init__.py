from .app import RequestInterrupted, create_app

__all__ = ["RequestInterrupted", "create_app"]
