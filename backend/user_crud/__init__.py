"""CRUD REST service for a single ``users`` resource."""

__version__ = "0.1.0"
