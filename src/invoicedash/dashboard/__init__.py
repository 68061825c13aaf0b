"""
Dashboard

This module provides the dashboard's data access service: summary cards,
invoice and customer listings, lookups, and the comment write path.
"""

from invoicedash.dashboard.service import DashboardService, empty_card_data

__all__ = ["DashboardService", "empty_card_data"]
