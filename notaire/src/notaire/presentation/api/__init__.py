"""
REST API for Notaire.
"""
