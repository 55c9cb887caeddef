"""
HRMS Employee Service — Employee Operations
============================================

What:  The four employee operations, each a single collection call.
How:   Every method receives the collection (injected per request by the route)
       and returns API schemas. Driver failures become `DatabaseError` carrying
       the driver's message; "matched nothing" becomes `NoDocumentsError` on
       update and `NotFoundError` on delete.

Operation → driver call:
    list_employees   → find({}).to_list()
    create_employee  → insert_one, then find_one by the inserted _id
    update_employee  → find_one_and_update with $set (returned doc discarded)
    delete_employee  → delete_one

Design Decision:
    EmployeeService keeps no state; the shared collection handle comes from
    the dependency layer. Concurrent writes are resolved by MongoDB alone:
    last write wins, no versioning.
"""

import logging
from typing import List

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from hrms.exceptions import (
    DatabaseError,
    NO_DOCUMENTS_MESSAGE,
    NoDocumentsError,
    NotFoundError,
)
from hrms.models.employee import from_document, to_document, to_set_update
from hrms.schemas.employee import EmployeeIn, EmployeeResponse

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "record deleted"


class EmployeeService:
    """
    Business operations on the `employees` collection.

    Error Handling Strategy:
        Only `PyMongoError` is translated (→ DatabaseError). Anything else is a
        bug and propagates to the catch-all handler.
    """

    async def list_employees(self, collection: AsyncCollection) -> List[EmployeeResponse]:
        """
        Unfiltered scan of the collection.

        Returns:
            Every stored employee; an empty list (never None) for an empty
            collection.
        """
        try:
            cursor = collection.find({})
            documents = await cursor.to_list(None)
        except PyMongoError as e:
            logger.error("Database error listing employees: %s", str(e))
            raise DatabaseError(message=str(e), context={"operation": "list"})

        return [from_document(document) for document in documents]

    async def create_employee(
        self, collection: AsyncCollection, employee: EmployeeIn
    ) -> EmployeeResponse:
        """
        Insert a new employee and return it as stored.

        Workflow:
            1. Drop any client-supplied id
            2. insert_one → MongoDB assigns `_id`
            3. find_one by that `_id` for the canonical stored form

        Raises:
            DatabaseError: insert failed, re-read failed, or the re-read
                found nothing (deleted between the two calls)
        """
        try:
            result = await collection.insert_one(to_document(employee))
            stored = await collection.find_one({"_id": result.inserted_id})
        except PyMongoError as e:
            logger.error("Database error creating employee: %s", str(e))
            raise DatabaseError(message=str(e), context={"operation": "create"})

        if stored is None:
            logger.error("Inserted employee %s vanished before re-read", result.inserted_id)
            raise DatabaseError(
                message=NO_DOCUMENTS_MESSAGE,
                context={"operation": "create", "inserted_id": str(result.inserted_id)},
            )

        logger.info("Employee created: %s", result.inserted_id)
        return from_document(stored)

    async def update_employee(
        self,
        collection: AsyncCollection,
        employee_id: ObjectId,
        employee: EmployeeIn,
    ) -> EmployeeResponse:
        """
        Overwrite name, age and salary of one employee.

        The response echoes the request body with the path id; the document
        returned by find_one_and_update is not used.

        Raises:
            NoDocumentsError: no employee has this id (→ 400)
            DatabaseError: any other driver failure (→ 500)
        """
        try:
            previous = await collection.find_one_and_update(
                {"_id": employee_id},
                to_set_update(employee),
            )
        except PyMongoError as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"operation": "update", "employee_id": str(employee_id)},
            )

        if previous is None:
            raise NoDocumentsError(resource_id=str(employee_id))

        logger.info("Employee updated: %s", employee_id)
        return EmployeeResponse(
            id=str(employee_id),
            name=employee.name,
            salary=employee.salary,
            age=employee.age,
        )

    async def delete_employee(self, collection: AsyncCollection, employee_id: ObjectId) -> str:
        """
        Hard-delete one employee.

        Returns:
            The confirmation message sent back to the client.

        Raises:
            NotFoundError: nothing was deleted (→ 404)
            DatabaseError: driver failure (→ 500)
        """
        try:
            result = await collection.delete_one({"_id": employee_id})
        except PyMongoError as e:
            logger.error("Database error deleting employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message=str(e),
                context={"operation": "delete", "employee_id": str(employee_id)},
            )

        if result.deleted_count < 1:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        logger.info("Employee deleted: %s", employee_id)
        return DELETED_MESSAGE


employee_service = EmployeeService()
