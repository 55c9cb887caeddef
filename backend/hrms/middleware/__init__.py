# Middleware package init
"""
HRMS Employee Service — Middleware Package
===========================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → Route Handler

Request ID runs first so the access log line carries the id.
"""
