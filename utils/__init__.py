"""Configuration and export helpers for the fiscal calendar tool."""
