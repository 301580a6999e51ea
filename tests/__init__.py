"""Test suite for the organisations service.

Test structure follows the test pyramid:
- unit/: Unit tests - Test domain logic in isolation
- integration/: Integration tests - Repositories and unit of work on SQLite
- api/: API endpoint tests - Test HTTP endpoints end-to-end
"""
