# Middleware package init
"""
Inspection Data API — Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID: correlation id for every log line and error body
    - Logging: access log line with status and duration
"""
