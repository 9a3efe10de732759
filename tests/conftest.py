"""Shared pytest configuration."""

import matplotlib

# Headless rendering for chart tests
matplotlib.use("Agg")
