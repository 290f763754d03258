# easyguide/notification/__init__.py
"""Notification service: consumes the mail queue and sends transactional email."""
