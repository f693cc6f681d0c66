"""
Monitoring: structured logging and Prometheus metrics.
"""
