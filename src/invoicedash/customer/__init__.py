"""
Customer

This module provides data access for customers and their invoice totals.
"""

from invoicedash.customer.repository import CustomerRepository

__all__ = ["CustomerRepository"]
