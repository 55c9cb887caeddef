# Services package init
"""
HRMS Employee Service — Services Layer
=======================================

What:  Operations between routes (HTTP) and the collection (persistence).

Service Inventory:
    - EmployeeService: list / create / update / delete on `employees`
"""
