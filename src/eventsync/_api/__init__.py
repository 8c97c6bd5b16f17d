"""Endpoint modules for the remote event collection resource."""
