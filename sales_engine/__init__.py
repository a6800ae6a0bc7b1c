"""
sales_engine — Seller performance analytics.

Submodules:
    - config: Environment-driven engine settings
    - processors: Dataset-specific pipelines (seller_performance)
"""
