"""Packaged tariff manifests."""
