# Routes package init
"""
HRMS Employee Service — API Routes Package
===========================================

Route Inventory:
    - employees.py: GET/POST /employee, PUT/DELETE /employee/{id}
    - health.py:    GET /health

Routes stay thin: parse the request, call the service, pick the status code.
"""
