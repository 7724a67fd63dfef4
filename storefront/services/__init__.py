"""Shared services: money helpers and the card checkout session service."""
