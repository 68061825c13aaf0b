"""Data-access and aggregation layer for the invoicing dashboard."""
