"""
Pizza Pantry: inventory tracking for a pizza kitchen.
"""

__version__ = "0.1.0"
