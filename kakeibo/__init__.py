"""Household income and expense tracker."""

__version__ = "1.0.0"
