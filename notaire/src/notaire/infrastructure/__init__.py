"""
Notaire infrastructure layer.
"""
