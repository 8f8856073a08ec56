"""Utility modules for chart_decoder."""
