"""Provision object-store volumes and buckets from layered, optional configuration."""

__version__ = "0.1.0"
