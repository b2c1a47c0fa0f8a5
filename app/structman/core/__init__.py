"""Core path resolution and theming for structman."""
