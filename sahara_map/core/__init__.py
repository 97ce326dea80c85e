"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Source/layer identifiers, basemap catalogue, geodetic constants
- exceptions: Custom exception hierarchy
- ingress: Async JSON fetching from URLs or local files
"""
