"""Favorites app package.

Customers bookmark venues; only active venues are listed back.
"""
