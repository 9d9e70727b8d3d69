"""Resource rendering and newsletter handoff services."""
