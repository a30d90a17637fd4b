"""
findfiles - Core Package

A bounded, multi-root file search engine: breadth-first traversal of one or
more directories with name, size, date, type and content filters, a result
cap and a wall-clock timeout.
"""

__version__ = "0.1.0"
__author__ = "findfiles Team"
