"""On-demand package installation.

This module owns the isolated runtime package directory and the
install-once bookkeeping around the external installer tool.
"""
