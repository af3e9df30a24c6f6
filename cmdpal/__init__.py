"""
cmdpal - Command palette engine for terminal applications
"""

__version__ = "0.1.0"
