"""Configuration, logging, auth and shared primitives."""
