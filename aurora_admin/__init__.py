"""Aurora Admin — user and point-of-sale administration over a hosted backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
