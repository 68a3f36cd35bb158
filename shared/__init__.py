"""
Shared Kernel

Value objects and helpers shared across the VenueKart domain apps.
"""
