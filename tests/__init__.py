"""
Test Suite for the Book Review API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_auth.py: Registration, login and the bearer token guard
- test_books.py: /books endpoints
- test_reviews.py: /books/{id}/reviews and /reviews endpoints
- test_pagination.py: page/limit to offset/limit conversion

Running Tests:
    pytest
    pytest --cov=bookreview --cov-report=html
    pytest tests/test_books.py::TestCreateBook
"""
