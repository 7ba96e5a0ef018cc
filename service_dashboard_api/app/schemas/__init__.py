"""
Pydantic schema definitions for API payloads.

Each domain (service catalog, dashboard) defines its own Pydantic
models for request and response bodies.  Schemas are separated from
the stored documents so the API representation stays stable even when
records written by external processes carry loose types.
"""
