"""Signature compliance figures for RAMS documents."""
