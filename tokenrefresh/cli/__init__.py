"""CLI module for tokenrefresh."""
