"""Offline persona ingestion tool."""
