# easyguide/payment/__init__.py
"""Payment service: a thin, validated wrapper over the Stripe API."""
