"""Bundled data files for structman."""
