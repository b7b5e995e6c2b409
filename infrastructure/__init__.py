"""Operational support for the chord progression engine API.

Modules:
    metrics     Prometheus counters, latency histogram and LatencyTimer.
"""
