"""
Domain layer: accounts, the transaction ledger and market prices.

Plain dataclasses, exceptions and port ABCs only. Nothing here
performs IO or imports a framework.
"""
