"""
BidWriter API Routers
FastAPI router modules for budgets, compliance, funders, proposals and writing.
"""
from bidwriter.api import budgets, compliance, funders, health, literature, proposals, writing

__all__ = [
    "budgets",
    "compliance",
    "funders",
    "health",
    "literature",
    "proposals",
    "writing",
]
