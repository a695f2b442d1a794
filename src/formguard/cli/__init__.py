"""formguard command-line interface."""
