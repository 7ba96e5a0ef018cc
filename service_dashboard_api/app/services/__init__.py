"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Storage access
goes through ``RecordService``; the dashboard math (``statistics_service``
and ``period_service``) is pure and works on plain record dictionaries.
"""
