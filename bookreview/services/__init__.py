"""
Services Package

Business logic kept separate from HTTP handling (routers):
- books.py: book catalog operations
- reviews.py: review creation and owner-only changes
- security.py: password hashing and JWT utilities
- rate_limiter.py: rate limiting with slowapi
"""
