"""
HRMS Employee Service — Employee Document Mapping
==================================================

What:  Converts between API schemas and documents in the `employees` collection.

Document layout:
    {
        "_id":    ObjectId,   # assigned by MongoDB on insert
        "name":   str,
        "salary": float,
        "age":    float,
    }

No indexes beyond `_id`, no schema enforcement on the server side; documents
written by other clients are read leniently (missing fields → zero values).
"""

from typing import Any, Dict

from bson import ObjectId
from bson.errors import InvalidId

from hrms.exceptions import ValidationError
from hrms.schemas.employee import EmployeeIn, EmployeeResponse

MUTABLE_FIELDS = ("name", "age", "salary")


def parse_object_id(value: str) -> ObjectId:
    """
    Parse a 24-character hex string into an ObjectId.

    Raises:
        ValidationError: value is not a valid ObjectId hex string
    """
    # ObjectId() also accepts 12-byte strings; only hex is an id here
    if len(value) != 24:
        raise ValidationError(message="the provided hex string is not a valid ObjectID", field="id")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(message="the provided hex string is not a valid ObjectID", field="id")


def to_document(employee: EmployeeIn) -> Dict[str, Any]:
    """Insertable document. The client id is dropped so MongoDB assigns `_id`."""
    return {
        "name": employee.name,
        "salary": employee.salary,
        "age": employee.age,
    }


def to_set_update(employee: EmployeeIn) -> Dict[str, Any]:
    """`$set` update overwriting every mutable field."""
    return {"$set": {field: getattr(employee, field) for field in MUTABLE_FIELDS}}


def from_document(document: Dict[str, Any]) -> EmployeeResponse:
    raw_id = document.get("_id")
    return EmployeeResponse(
        id=str(raw_id) if raw_id is not None else "",
        name=document.get("name") or "",
        salary=document.get("salary") or 0.0,
        age=document.get("age") or 0.0,
    )
