"""Fetch, order and render Wunderlist lists with a stale-cache fallback."""
