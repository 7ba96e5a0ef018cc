"""
Version 1 of the API.

Bundles the service catalog and dashboard endpoints.  Breaking changes
belong in a new version subpackage.
"""
