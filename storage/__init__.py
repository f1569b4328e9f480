"""Persistence for parsed datasets."""
