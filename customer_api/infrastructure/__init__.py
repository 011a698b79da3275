"""Infrastructure Layer — database session management and logging.

Invariants:
    - Infrastructure never imports route modules
    - Store failures leave this layer as StoreError
"""
