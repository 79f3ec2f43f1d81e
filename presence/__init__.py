"""
Presence module - Heartbeat-derived online status and address provenance.

This module handles:
- AddressSighting entity
- Idempotent (license key, address) upserts
- Distinct address counts per license key
"""
