"""Composable text filters with the configuration, query and alias handling around them."""

__version__ = "0.1.0"