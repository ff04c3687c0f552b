"""API module for traineeboard.

- Validates inputs, reads/mutates the store
- Returns payloads for the dashboard UI
- Forbidden: statistics and filter logic (delegated to metrics/query/aggregation)
"""
