"""Flight search and booking client."""
