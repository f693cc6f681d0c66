"""
Test helpers for Notaire.
"""
