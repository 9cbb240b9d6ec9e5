"""Infrastructure Layer — hosted backend clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with error mapping to core/errors.py
"""
