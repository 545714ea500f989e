"""
LLM integration for chemical lookups.

This package contains:
- client: Gemini REST client wrapper
- lookup: CAS lookup, response validation and classification
- prompts: Lookup prompt builder
"""
