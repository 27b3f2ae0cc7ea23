"""
SQLAlchemy adapters for accounts, cached holdings and the
append-only transaction ledger.
"""
