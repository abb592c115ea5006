"""Clients for upstream systems."""
