"""addonkit core: resolution, preset loading and extension application."""
