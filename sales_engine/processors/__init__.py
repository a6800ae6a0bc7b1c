"""
Processors — Dataset-specific pipelines.

    seller_performance — per-seller revenue, profit, ranking and bonuses
"""
