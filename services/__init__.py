"""
Service layer for business logic.

This package contains the ChemicalService, which owns the configured
Gemini client and the classification tables used by the API.
"""
