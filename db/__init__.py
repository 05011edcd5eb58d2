"""
SQLAlchemy models (destination and legacy schemas) and connection helpers.
"""
