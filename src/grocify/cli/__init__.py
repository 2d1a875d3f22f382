"""Command line interface for grocify."""
