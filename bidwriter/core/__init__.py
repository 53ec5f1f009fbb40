"""
Core configuration and exceptions for BidWriter.
"""
