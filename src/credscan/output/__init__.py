"""Reporters: JSON payload and Rich terminal table."""
