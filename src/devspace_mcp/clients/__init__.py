"""Cluster access clients."""
