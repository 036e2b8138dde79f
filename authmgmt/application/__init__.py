"""Application layer - credential flows.

Structure:
- account_lookup.py: Account resolution by embedded id or identity
- secret_issuer.py: Secret pair generation, hashing and expiry
- commands/: Command dataclasses (one per action) and their handlers
- service.py: Single entry point dispatching commands and wire requests

Handlers ONLY import from core and domain; adapters are injected.
"""
