"""
Translation of market and trading domain errors into JSON error responses.
"""
