"""Ambient concerns: settings, logging, and the per-invocation context."""
