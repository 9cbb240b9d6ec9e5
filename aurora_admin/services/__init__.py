"""Services Layer — orchestration between routes and the hosted backend.

Invariants:
    - Services depend on core protocols (TableGateway, AuthGateway), never on the SDK
    - Every reference field is sanitized before it reaches a write
"""
