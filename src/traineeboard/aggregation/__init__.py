"""Aggregation module for trainee performance views.

- Joins trainees with their test results and summarizes them
  (monitor rows, trainee status, analysis charts, dashboard totals)
- Forbidden: store mutation, filter expression parsing
"""
