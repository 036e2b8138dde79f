"""Test suite for authmgmt.

Test structure:
- unit/: Unit tests - one module per component, mocked notifier and logger
- integration/: Integration tests - complete flows through the service
"""
