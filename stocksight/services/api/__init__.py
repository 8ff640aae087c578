"""Stocksight API service."""
