"""HTTP API and command line surfaces over the pattern catalogue."""
