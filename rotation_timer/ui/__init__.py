"""
UI package for the Rotation Timer.

This package contains user interface implementations including
the Tkinter desktop app (``rotation_timer.ui.tkinter_app``, imported on
demand so headless servers do not need Tk) and the Flask JSON API.
"""
from .web_app import create_app, run_web_app, WebAppState, SessionTicker

__all__ = ["create_app", "run_web_app", "WebAppState", "SessionTicker"]
