"""Shared utilities for Canhão Podcast."""
