"""Interactive Tailscale host picker that opens an SSH session."""

__version__ = "0.1.0"
