"""
Infrastructure adapters for the market bounded context.

The upstream price API client and its outbound rate limiter.
"""
