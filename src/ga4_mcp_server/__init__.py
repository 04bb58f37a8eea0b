"""
GA4 MCP Server

A Model Context Protocol server exposing read-only Google Analytics 4 reports.
"""

__version__ = "1.0.0"

from .server import main

__all__ = ["main"]
