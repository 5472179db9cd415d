"""Interactive terminal client for the bearing assistant."""
