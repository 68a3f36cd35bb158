"""Bookings app package.

An inquiry is a pending booking. The venue owner confirms or declines it;
a confirmed booking carries a GST-inclusive amount that the payments app
collects.
"""
