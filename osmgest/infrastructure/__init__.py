"""IO layer: the HTTP dispatcher and the OSM API client built on it."""
