import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from . import models
from .cleaning_task import CleaningTask, insert_task
from .cleaning_task_template import CleaningTaskTemplate, insert_area
from .cleaning_task_template_list import CleaningTaskTemplateList
from .database import Gateway
from .errors import ServerError, classify_errors
from .sources import FromTemplate, NewWithExistingArea, NewWithNewArea, TaskSource
from .validation import check_date_not_in_past, check_integer, check_non_empty_string, check_optional_integer

logger = logging.getLogger(__name__)

CLEANING_TASK_LIST_COLUMNS = (
    models.CleaningTaskList.id.label("cleaning_task_list_id"),
    models.CleaningTaskList.date,
    models.CleaningTaskList.manager_signature,
    models.CleaningTaskList.staff_member_signature,
    models.CleaningTaskList.staff_member_id,
)

CLEANING_TASK_COLUMNS = (
    models.CleaningTask.id.label("cleaning_task_id"),
    models.CleaningTask.description.label("cleaning_task_description"),
    models.CleaningTask.completed,
    models.CleaningTask.cleaning_task_list_id,
    models.CleaningTask.area_id,
    models.Area.description.label("area_description"),
)


class CleaningTaskList:
    """
    A dated list of cleaning tasks stamped out from a template list.

    A task list can be assigned to a staff member and signed off by both a
    manager and a staff member. Its tasks move between incomplete and
    complete; asking for the state a task is already in is an error.
    """

    def __init__(self, gateway: Gateway, templates: CleaningTaskTemplate,
                 template_lists: CleaningTaskTemplateList, tasks: CleaningTask):
        self.gateway = gateway
        self.templates = templates
        self.template_lists = template_lists
        self.tasks = tasks

    def create(self, cleaning_task_template_list_id: int, date, staff_member_id: Optional[int] = None) -> int:
        """
        Create a task list for `date` with one task per template in the template list.

        `date` may be a date or datetime and must not be before local midnight
        today. A template list with no templates gives a task list with no tasks.
        """
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")
        day = check_date_not_in_past(date)
        check_optional_integer(staff_member_id, "staff_member_id")

        def body(db: Session) -> int:
            cleaning_task_list = models.CleaningTaskList(
                date=day,
                manager_signature=None,
                staff_member_signature=None,
                staff_member_id=staff_member_id
            )
            db.add(cleaning_task_list)
            db.flush()

            try:
                cleaning_task_template_ids = self.template_lists.list_template_ids(cleaning_task_template_list_id, db)
            except ServerError as e:
                if e.status_code != 404:
                    raise
                cleaning_task_template_ids = []

            # Copy each template into a new task on the list
            for cleaning_task_template_id in cleaning_task_template_ids:
                description = self.templates.get_description(cleaning_task_template_id, db)
                area_id = self.templates.get_area(cleaning_task_template_id, db)
                insert_task(db, description, cleaning_task_list.id, area_id)

            logger.info(
                f"Created cleaning task list {cleaning_task_list.id} for {day} "
                f"with {len(cleaning_task_template_ids)} cleaning tasks"
            )
            return cleaning_task_list.id

        with classify_errors("An error occurred while creating the new cleaning task list"):
            template_list = self.gateway.execute(
                select(models.CleaningTaskTemplateList.id)
                .where(models.CleaningTaskTemplateList.id == cleaning_task_template_list_id)
            )
            if template_list.rowcount == 0:
                raise ServerError("The cleaning task template list doesn't exist", 404)

            return self.gateway.execute_transaction(body)

    def get(self, cleaning_task_list_id: int) -> dict:
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")

        with classify_errors("An error occurred while retrieving the cleaning task list"):
            result = self.gateway.execute(
                select(*CLEANING_TASK_LIST_COLUMNS).where(models.CleaningTaskList.id == cleaning_task_list_id)
            )
            if result.rowcount == 0:
                raise ServerError("The cleaning task list was not found", 404)
            return result.rows[0]

    def create_task(self, cleaning_task_list_id: int, source: TaskSource) -> int:
        """Create a task on the list from a template, or from a description and an existing or new area."""
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")

        if isinstance(source, FromTemplate):
            check_integer(source.cleaning_task_template_id, "cleaning_task_template_id")

            def body(db: Session) -> int:
                description = self.templates.get_description(source.cleaning_task_template_id, db)
                area_id = self.templates.get_area(source.cleaning_task_template_id, db)
                return insert_task(db, description, cleaning_task_list_id, area_id)

        elif isinstance(source, NewWithExistingArea):
            check_non_empty_string(source.description, "cleaning_task_description")
            check_integer(source.area_id, "area_id")

            def body(db: Session) -> int:
                return insert_task(db, source.description, cleaning_task_list_id, source.area_id)

        elif isinstance(source, NewWithNewArea):
            check_non_empty_string(source.description, "cleaning_task_description")
            check_non_empty_string(source.area_description, "area_description")

            def body(db: Session) -> int:
                area_id = insert_area(db, source.area_description)
                return insert_task(db, source.description, cleaning_task_list_id, area_id)

        else:
            raise ServerError("invalid parameters supplied for creating a cleaning task", 400)

        with classify_errors("An error occurred while creating the new cleaning task"):
            cleaning_task_id = self.gateway.execute_transaction(body)
            logger.info(f"Created cleaning task {cleaning_task_id} on cleaning task list {cleaning_task_list_id}")
            return cleaning_task_id

    def mark_complete(self, cleaning_task_id: int) -> str:
        return self._mark(cleaning_task_id, True)

    def mark_incomplete(self, cleaning_task_id: int) -> str:
        return self._mark(cleaning_task_id, False)

    def _mark(self, cleaning_task_id: int, completed: bool) -> str:
        check_integer(cleaning_task_id, "cleaning_task_id")

        with classify_errors("An unexpected error occurred"):
            result = self.gateway.execute(
                select(models.CleaningTask.completed).where(models.CleaningTask.id == cleaning_task_id)
            )
            if result.rowcount == 0:
                raise ServerError(f"The cleaning task with id {cleaning_task_id} does not exist", 404)

            if result.rows[0]["completed"] == completed:
                if completed:
                    raise ServerError("The cleaning task is already completed", 400)
                raise ServerError("The cleaning task is already marked as incomplete", 400)

            return self.tasks.set_completed(cleaning_task_id, completed)

    def set_manager_signature(self, cleaning_task_list_id: int, signature: str) -> str:
        return self._set_signature(cleaning_task_list_id, signature, "manager_signature")

    def set_staff_member_signature(self, cleaning_task_list_id: int, signature: str) -> str:
        return self._set_signature(cleaning_task_list_id, signature, "staff_member_signature")

    def _set_signature(self, cleaning_task_list_id: int, signature: str, field: str) -> str:
        check_non_empty_string(signature, "signature")
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")

        column = getattr(models.CleaningTaskList, field)

        def body(db: Session) -> str:
            current = self.gateway.execute(
                select(column).where(models.CleaningTaskList.id == cleaning_task_list_id), db
            )
            if current.rowcount == 0:
                raise ServerError("The cleaning task list does not exist", 404)
            if current.rows[0][field] is not None:
                logger.info(f"Overwriting existing {field} on cleaning task list {cleaning_task_list_id}")

            self.gateway.execute(
                update(models.CleaningTaskList)
                .where(models.CleaningTaskList.id == cleaning_task_list_id)
                .values({field: signature}),
                db
            )
            return "update successful"

        with classify_errors(
            "An error occurred while updating the cleaning task list. Check that the cleaning task list exists"
        ):
            return self.gateway.execute_transaction(body)

    def delete(self, cleaning_task_list_id: int) -> str:
        """Delete the list; its tasks go with it."""
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")

        with classify_errors("An error occurred while deleting the cleaning task list"):
            result = self.gateway.execute(
                delete(models.CleaningTaskList).where(models.CleaningTaskList.id == cleaning_task_list_id)
            )
            if result.rowcount == 0:
                raise ServerError("The cleaning task list does not exist", 404)
            logger.info(f"Deleted cleaning task list {cleaning_task_list_id}")
            return "deletion successful"

    def list_tasks(self, cleaning_task_list_id: int) -> List[dict]:
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")

        with classify_errors("An error occurred while retrieving the cleaning tasks"):
            result = self.gateway.execute(
                select(*CLEANING_TASK_COLUMNS)
                .join(models.Area, models.CleaningTask.area_id == models.Area.id)
                .where(models.CleaningTask.cleaning_task_list_id == cleaning_task_list_id)
                .order_by(models.CleaningTask.id.asc())
            )
            if result.rowcount == 0:
                raise ServerError("There are no cleaning tasks linked to the cleaning task list specified", 404)
            return result.rows

    def assign_staff_member(self, cleaning_task_list_id: int, staff_member_id: int) -> str:
        """Assign a staff member by payroll number. The number is not checked against the directory."""
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")
        check_integer(staff_member_id, "staff_member_id")

        with classify_errors("An unexpected error occurred while updating the cleaning task list"):
            result = self.gateway.execute(
                update(models.CleaningTaskList)
                .where(models.CleaningTaskList.id == cleaning_task_list_id)
                .values(staff_member_id=staff_member_id)
            )
            if result.rowcount == 0:
                raise ServerError("There are no cleaning task lists with the specified id", 404)
            return "update successful"
