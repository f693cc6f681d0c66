"""
Notaire application layer.
"""
