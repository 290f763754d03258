# easyguide/data/__init__.py
"""Data-access service: owns the MySQL schema and the business rules."""
