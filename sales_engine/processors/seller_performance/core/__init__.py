"""
Core utilities for seller performance processing.

Modules:
    validation — Structural checks on the dataset and options
    indexing   — Seller-id and SKU lookup tables
    rounding   — Money rounding and rounding policy
"""
