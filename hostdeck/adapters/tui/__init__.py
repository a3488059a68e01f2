"""
Full-screen terminal UI
"""
from .app import TuiApp
from .render import render

__all__ = ["TuiApp", "render"]
