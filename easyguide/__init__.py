# easyguide/__init__.py
"""easyGuide travel-booking services: data, REST gateway, payment and notification."""

__version__ = "1.0.0"
