"""
Application layer for the market bounded context.

Thin use cases over MarketPricePort that validate input and
map domain value objects to DTOs.
"""
