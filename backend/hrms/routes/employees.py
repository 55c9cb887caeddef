"""
HRMS Employee Service — Employee Route Handlers
================================================

What:  GET/POST /employee and PUT/DELETE /employee/{id}.
How:   Each handler gets the collection from `get_employee_collection`, parses
       the path id through `get_employee_id` (400 before any database call),
       delegates to EmployeeService and picks the success status code.
       Failures are raised as application exceptions and rendered by the
       handlers in `hrms.main`.

Route Inventory:
    GET    /employee        → 200 [Employee]
    POST   /employee        → 201 Employee
    PUT    /employee/{id}   → 200 Employee
    DELETE /employee/{id}   → 200 "record deleted"
"""

import logging
from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends
from pymongo.asynchronous.collection import AsyncCollection

from hrms.database import get_employee_collection
from hrms.models.employee import parse_object_id
from hrms.schemas.employee import EmployeeIn, EmployeeResponse
from hrms.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Employees"])

_TEXT_ERROR = {"content": {"text/plain": {"schema": {"type": "string"}}}}


def get_employee_id(id: str) -> ObjectId:
    """Path dependency: the `{id}` segment as an ObjectId, or ValidationError (400)."""
    return parse_object_id(id)


@router.get(
    "/employee",
    response_model=List[EmployeeResponse],
    responses={500: {"description": "Database error", **_TEXT_ERROR}},
    summary="List all employees",
)
async def list_employees(
    collection: AsyncCollection = Depends(get_employee_collection),
) -> List[EmployeeResponse]:
    return await employee_service.list_employees(collection)


@router.post(
    "/employee",
    status_code=201,
    response_model=EmployeeResponse,
    responses={
        400: {"description": "Malformed JSON body", **_TEXT_ERROR},
        500: {"description": "Database error", **_TEXT_ERROR},
    },
    summary="Create an employee",
    description="Any `id` in the body is ignored; the database assigns one.",
)
async def create_employee(
    employee: EmployeeIn,
    collection: AsyncCollection = Depends(get_employee_collection),
) -> EmployeeResponse:
    return await employee_service.create_employee(collection, employee)


@router.put(
    "/employee/{id}",
    response_model=EmployeeResponse,
    responses={
        400: {"description": "Invalid id, malformed body or no matching employee", **_TEXT_ERROR},
        500: {"description": "Database error", **_TEXT_ERROR},
    },
    summary="Overwrite an employee",
    description=(
        "Sets name, age and salary from the body. Omitted fields are written as "
        "empty string / zero. Responds with the body and the path id."
    ),
)
async def update_employee(
    employee: EmployeeIn,
    employee_id: ObjectId = Depends(get_employee_id),
    collection: AsyncCollection = Depends(get_employee_collection),
) -> EmployeeResponse:
    return await employee_service.update_employee(collection, employee_id, employee)


@router.delete(
    "/employee/{id}",
    response_model=str,
    responses={
        400: {"description": "Invalid id", **_TEXT_ERROR},
        404: {"description": "No matching employee", **_TEXT_ERROR},
        500: {"description": "Database error", **_TEXT_ERROR},
    },
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: ObjectId = Depends(get_employee_id),
    collection: AsyncCollection = Depends(get_employee_collection),
) -> str:
    """
    Hard delete. A second delete of the same id is a 404, whereas updating a
    missing id is a 400; both codes are part of the existing API.
    """
    return await employee_service.delete_employee(collection, employee_id)
