"""Core configuration for the FitPulse server."""
