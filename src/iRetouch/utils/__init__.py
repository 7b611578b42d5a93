"""Shared helpers for iRetouch."""
