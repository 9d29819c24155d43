"""Marketplace sales line items, the mandatory source for every trend report."""
