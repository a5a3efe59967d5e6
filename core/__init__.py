"""
Core - shared infrastructure for SeaVitae apps

This package provides:
- Abstract base models with UUID identifiers and timestamps
- ServiceResult / ErrorCode, the typed result every service returns
- Helpers that turn a ServiceResult into a DRF response
- Role-based permission classes
"""
