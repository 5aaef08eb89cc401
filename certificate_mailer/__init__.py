"""Sends certificate and feedback emails to a roster kept in Google Sheets."""

__version__ = "0.1.0"
