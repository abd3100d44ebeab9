"""
easyi18n - Build-time translation of inline [[[nuggets]]].
"""

__version__ = "1.0.0"
