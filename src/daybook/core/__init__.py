"""Shared infrastructure: config, exceptions, events, logging, storage."""
