"""Command-line interface for playing and simulating UNO games."""
