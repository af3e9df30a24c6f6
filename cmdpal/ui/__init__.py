"""UI package for cmdpal.

Textual components that host the command palette engine:

- CommandPaletteScreen: the palette overlay
- PaletteApp: a minimal host application that opens it
"""
