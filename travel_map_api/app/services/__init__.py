"""
Service layer abstraction.

Each service encapsulates the business logic for one collection:
validating payloads, assigning ids and timestamps, persisting through
the document store and writing an audit entry.  API handlers only
translate between HTTP and these calls.
"""
