"""FitPulse forum API."""
