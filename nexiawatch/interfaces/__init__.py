"""Interface layer (command line) for Nexiawatch."""
