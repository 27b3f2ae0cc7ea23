"""
Trading bounded context, domain layer.

This module contains all domain logic for the trading context:
- Accounts with a USD balance and crypto holdings
- The append-only transaction ledger
- Holdings reconstruction from the ledger
"""
