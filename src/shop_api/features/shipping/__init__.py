"""Shipping methods offered at checkout."""
