"""Shared utilities: exceptions, error handling, logging and configuration."""
