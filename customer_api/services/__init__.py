"""Services Layer — store implementations behind the core repository protocols.

Invariants:
    - Every store is bound to a single request's AsyncSession
    - Stores never retry; failures reach the error translator
"""
