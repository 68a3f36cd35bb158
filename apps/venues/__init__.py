"""Venues app package.

Holds the venue catalog: venues owned by venue-owner accounts, their
images and facilities, the price range normalised into a single displayed
``price_per_day``, and the public listing with filters and pagination.
"""
