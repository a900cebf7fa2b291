"""Infrastructure Layer — persistence, external service clients, and cross-cutting concerns.

Invariants:
    - Stores implement the Protocols in core/repository_protocols.py
    - All external calls wrapped with timeout and error mapping (UploadError, StoreError)
"""
