"""Endpoint groups mounted by :func:`gateway.api.app.create_app`."""
