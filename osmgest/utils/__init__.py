"""Configuration and logging helpers shared by the client and scripts."""
