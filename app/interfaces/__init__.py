"""
HTTP surface of CryptoSim.

One FastAPI router per bounded context (accounts/trading, market)
plus the health probe. Routers translate requests into use case
commands and results into response schemas.
"""
