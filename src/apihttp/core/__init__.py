"""Core functionality: configuration, logging and the HTTP dispatcher."""
