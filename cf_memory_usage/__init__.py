"""Report memory usage and quota across Cloud Foundry orgs, spaces, apps and instances."""

__version__ = "0.2.0"
