"""
Accounts module - Role-tagged accounts and administrative authorization.

This module handles:
- Account entity (creator / admin / operator)
- Authentication and creator bootstrap
- AuthorizationGate for the admin surface
"""
