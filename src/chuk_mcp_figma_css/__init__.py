"""
CHUK Figma CSS - resolve Figma-style design trees into layered CSS.
"""

__version__ = "0.1.0"
