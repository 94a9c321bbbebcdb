"""
Shared helpers: logging setup and catalog constants.
"""
