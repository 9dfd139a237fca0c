"""Miscellaneous development tools and standalone helpers.

This package contains optional helpers that are useful during debugging or
offline analysis, including the opt-in timing hooks in :mod:`debug` and the
``sigfractal-extract`` CSV replay command in :mod:`extract`.
"""
