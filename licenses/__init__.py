"""
Licenses module - License key issuance and verification.

This module handles:
- LicenseKey entity and domain logic
- Verification, activation toggling and deletion
- Heartbeats and comment counting
"""
