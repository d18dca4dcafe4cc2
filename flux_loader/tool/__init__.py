"""Command line actions for flux-loader."""
