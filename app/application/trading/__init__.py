"""
Trading use cases: open account, deposit, buy, balance, history
and holdings reconciliation.
"""
