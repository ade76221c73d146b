"""Cleanup beach catalog."""

from shoresquad.beaches.catalog import DEFAULT_BEACH, SINGAPORE_BEACHES, Beach, BeachSelector

__all__ = ["Beach", "BeachSelector", "SINGAPORE_BEACHES", "DEFAULT_BEACH"]
