"""
BidWriter: grant proposal budgeting, compliance checking and drafting API.
"""

__version__ = "1.0.0"
