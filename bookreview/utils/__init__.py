"""
Utilities Package

Helpers shared by services and dependencies:
- pagination.py: page/limit to offset/limit conversion
"""
