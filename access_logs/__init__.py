"""
Access logs module - Append-only journal of key and account activity.

This module handles:
- AccessEvent entity
- Database and bounded in-memory journal backends
- Retention and comment purging
"""
