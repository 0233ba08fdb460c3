"""Static dependency scanning.

This module turns raw script text into candidate package identifiers.
It is a heuristic pre-pass; import interception remains authoritative.
"""
