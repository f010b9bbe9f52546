"""Runtime configuration for cratekit."""
