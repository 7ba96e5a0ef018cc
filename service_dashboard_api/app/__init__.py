"""
Application package initializer.

The API is split into two domains: the service catalog (CRUD over the
``services`` collection) and the financial dashboard (counters and a
revenue chart derived from ``transactions`` and ``expenses``).  Each
domain exposes a router defined in ``api/v1/endpoints``; the business
logic lives in ``services`` and the request/response models in
``schemas``.
"""

from .main import app  # noqa: F401
