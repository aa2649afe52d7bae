"""Async client for the Wunderlist REST API."""
