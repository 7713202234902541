"""CLI module for palytt_client."""
