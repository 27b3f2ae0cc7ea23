"""
Market bounded context, domain layer.

Price entities, market data errors and the port the trading
context uses to obtain prices from the upstream provider.
"""
