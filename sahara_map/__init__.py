"""Sahara desert map pipeline.

Turns a desert boundary GeoJSON into the pieces an interactive web map
needs: geographic coordinates regardless of input projection, an inverse
world mask, pan/zoom bounds, point-in-region queries, and the layer/source
operations that install them on a MapLibre-style map shell.
"""

__version__ = "0.1.0"
