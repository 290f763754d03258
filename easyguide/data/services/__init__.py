# easyguide/data/services/__init__.py
