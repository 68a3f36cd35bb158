"""Uploads app package.

Accepts base64 data-URL images from the venue forms and stores them in an
S3-compatible bucket.
"""
