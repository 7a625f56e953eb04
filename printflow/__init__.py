"""
printflow - Print production tracker
"""

__version__ = "0.1.0"
__logo__ = "🖨️"
