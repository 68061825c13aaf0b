"""
Revenue

This module provides data access for the monthly revenue series.
"""

from invoicedash.revenue.repository import RevenueRepository

__all__ = ["RevenueRepository"]
