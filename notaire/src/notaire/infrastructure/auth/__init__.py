"""
Authentication infrastructure.
"""
