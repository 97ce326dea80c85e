"""Pipeline activities.

- load_region: fetch region GeoJSON, normalise, build mask and bounds
- load_overlay: fetch the optional raster overlay bounds document
- describe_feature: label/value rows for a clicked feature
"""
