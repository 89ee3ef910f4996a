"""
Shared helpers: logging, exceptions, formatting and the explorer directory.
"""
