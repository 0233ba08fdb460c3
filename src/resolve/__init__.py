"""Import resolution fallback.

This module layers runtime-directory lookups and install-on-demand over
the interpreter's normal finder chain for the duration of one execution.
"""
