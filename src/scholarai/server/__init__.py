"""
HTTP API for ScholarAI.
"""

from scholarai.server.app import build_pipeline, create_app, main

__all__ = ["build_pipeline", "create_app", "main"]
