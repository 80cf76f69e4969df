"""HTTP adapter for the timer controller."""
from .app import create_app, timer_error_handler
from .routes import router

__all__ = ["create_app", "timer_error_handler", "router"]
