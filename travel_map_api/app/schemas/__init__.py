"""
Pydantic schemas for request validation.

Stored documents are plain dictionaries; these models only decide
whether an incoming payload is acceptable and which of its keys may be
written to a document.
"""
