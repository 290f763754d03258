# easyguide/rest/__init__.py
"""Public REST gateway: sessions, cart, checkout and back-office on top of the internal services."""
