"""Infrastructure layer - adapters for the domain protocols.

Structure:
- security/: bcrypt secret hasher
- persistence/: In-memory document account store
- logging/: structlog console adapter
- notifications/: Logging notifier
"""
