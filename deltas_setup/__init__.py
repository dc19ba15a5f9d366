"""Deltas setup wizard -- derives docker-compose.yaml, nginx.conf and .env files."""
