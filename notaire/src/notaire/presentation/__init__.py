"""
Presentation layer: HTTP API.
"""
