"""
Headline Sorter - sort real news from fake on a moving conveyor belt.
"""

__version__ = "0.1.0"
