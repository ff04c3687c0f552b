"""Query module for test result tables.

- Filters and paginates snapshots of test results, trainees and monitor rows
- Forbidden: store mutation, statistics
"""
