"""Payments app package.

Bridges confirmed bookings to the Razorpay checkout: order creation,
client-side signature verification, failure reports and the gateway
webhook.
"""
