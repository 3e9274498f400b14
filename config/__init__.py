"""Configuration package for the Wasteland Survivor server."""
