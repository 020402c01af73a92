"""
Test Suite for Bookstore API

Test Organization:
- conftest.py: Shared fixtures (test database, clients, sample data)
- test_books.py: The four /api book endpoints
- test_status_codes.py: Strict status-code mapping
- test_app.py: Startup, health check, error logging
- test_config.py: Settings and connection URL
- test_database.py: Storage helpers

Running Tests:
    pytest
    pytest tests/test_books.py -v
"""
