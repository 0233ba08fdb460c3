"""Script download and execution.

This module fetches remote scripts, pre-installs what they import, and
runs them with import interception active.
"""
