"""
freetimefinder - find the free ranges of a day for a meeting.
"""

__version__ = "0.1.0"
