"""Ports (repository protocols and exceptions) for the Tenancy context."""
