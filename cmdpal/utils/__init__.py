"""Utility modules for cmdpal."""
