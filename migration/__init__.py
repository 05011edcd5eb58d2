# migration/__init__.py
"""
Legacy SQL Server -> PostgreSQL migration pipeline.

Stages:
    extract   - legacy tables to JSON export files
    transform - value normalization and column mapping (per record)
    load      - batch inserts in dependency order
    verify    - post-load row counts and sentinel-date check
"""
