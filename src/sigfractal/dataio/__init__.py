"""Data input/output helpers (CSV series and feature rows).

Utility modules here keep disk-level concerns isolated from the pipeline:
- :mod:`log_loader` parses recorded CSV series for offline replay.
- :mod:`csv_writer` emits one CSV row per extracted feature vector.
"""
