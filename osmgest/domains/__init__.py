"""Domain layer: OSM request records, query builders and the endpoint table.

Nothing here performs IO; the client in `osmgest.infrastructure` turns these
descriptions into requests.
"""
