"""Vendor-specific channel adapters."""
