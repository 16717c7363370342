"""Application services (auth lifecycle) and their shared contracts."""
