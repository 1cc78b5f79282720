"""State/store layer.

This package owns the local mirrors of the remote tables and the rules
for keeping them consistent with the outcome of each remote call.
"""
