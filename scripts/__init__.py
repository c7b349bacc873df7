"""Command blocker hook scripts."""
