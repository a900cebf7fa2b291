"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic, except token issuance which reads `secrets`
    - Async appears only in Protocol signatures implemented by the shell
"""
