"""
Core modules for chemical storage classification.

This package contains:
- classifier: H-statement -> storage category classification
- config: Application configuration and settings
- exceptions: Custom exception classes
- logger: Logging configuration
- rules: Default rule and label tables
- schema: Pydantic models for lookup data and results
"""
