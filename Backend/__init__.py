# Backend/__init__.py
"""RTX2000 series configurator backend: configuration engine plus HTTP host."""
