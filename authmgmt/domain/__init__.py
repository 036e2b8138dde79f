"""Domain layer - Pure business logic.

Structure:
- entities/: Account entity and pending secret pair helpers
- protocols/: Ports for the store, hasher, notifier and logger
- gates.py: Verification gate checks
- token_codec.py: Token generation and id embedding
- verification.py: Verification state machine and engine

The domain layer defines WHAT the credential rules are, not HOW the
collaborators are implemented.
"""
