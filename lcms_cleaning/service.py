"""
Use case operations of the cleaning module.

`CleaningService` composes the entity classes into the operations the HTTP
routes call. Most operations delegate directly; the mark complete/incomplete
operations also check that the task belongs to the list named.
"""
import logging
from datetime import date
from typing import List, Optional, Union

from sqlalchemy import select

from . import models
from .cleaning_task import CleaningTask
from .cleaning_task_list import CLEANING_TASK_LIST_COLUMNS, CleaningTaskList
from .cleaning_task_template import CleaningTaskTemplate, select_templates_with_area
from .cleaning_task_template_list import CLEANING_TASK_TEMPLATE_LIST_COLUMNS, CleaningTaskTemplateList
from .database import Gateway
from .errors import ServerError, classify_errors
from .sources import resolve_area_source, resolve_task_source
from .staff_member import StaffMember
from .validation import check_integer

logger = logging.getLogger(__name__)


class CleaningService:
    def __init__(self, gateway: Gateway, staff_members: Optional[StaffMember] = None):
        self.gateway = gateway
        self.cleaning_task_templates = CleaningTaskTemplate(gateway)
        self.cleaning_task_template_lists = CleaningTaskTemplateList(gateway)
        self.cleaning_tasks = CleaningTask(gateway)
        self.cleaning_task_lists = CleaningTaskList(
            gateway, self.cleaning_task_templates, self.cleaning_task_template_lists, self.cleaning_tasks
        )
        self.staff_members = staff_members

    # Cleaning task template lists

    def create_cleaning_task_template_list(self, title: str, cleaning_task_templates: List[int]) -> int:
        return self.cleaning_task_template_lists.create(title, cleaning_task_templates)

    def view_cleaning_task_template_list(self, cleaning_task_template_list_id: int) -> dict:
        return self.cleaning_task_template_lists.get(cleaning_task_template_list_id)

    def add_cleaning_task_template_to_cleaning_task_template_list(
        self,
        cleaning_task_template_list_id: int,
        cleaning_task_template_id: Optional[int] = None,
        cleaning_task_template_description: Optional[str] = None,
        area_id: Optional[int] = None,
        area_description: Optional[str] = None
    ) -> Union[str, int]:
        """
        Link an existing template to a template list, or create a new one linked to it.

        Supplying only `cleaning_task_template_id` links that template and
        returns a success message. Otherwise a new template is created from
        the description and an existing or new area, and its id is returned.
        """
        if (
            cleaning_task_template_id is not None
            and cleaning_task_template_description is None
            and area_id is None
            and area_description is None
        ):
            return self.cleaning_task_template_lists.add_template(
                cleaning_task_template_list_id, cleaning_task_template_id
            )

        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")
        if cleaning_task_template_id is not None:
            raise ServerError("Invalid arguments supplied", 400)

        return self.cleaning_task_template_lists.create_template(
            cleaning_task_template_description,
            resolve_area_source(area_id, area_description),
            cleaning_task_template_list_id
        )

    def remove_cleaning_task_template_from_cleaning_task_template_list(
        self, cleaning_task_template_list_id: int, cleaning_task_template_id: int
    ) -> str:
        return self.cleaning_task_template_lists.remove_template(
            cleaning_task_template_list_id, cleaning_task_template_id
        )

    def delete_cleaning_task_template_list(self, cleaning_task_template_list_id: int) -> str:
        return self.cleaning_task_template_lists.delete(cleaning_task_template_list_id)

    def get_cleaning_task_templates_from_cleaning_task_template_list(
        self, cleaning_task_template_list_id: int
    ) -> List[dict]:
        return self.cleaning_task_template_lists.list_templates_with_detail(cleaning_task_template_list_id)

    def get_cleaning_task_template_lists(self) -> List[dict]:
        with classify_errors("An error occurred while retrieving cleaning task template lists"):
            result = self.gateway.execute(
                select(*CLEANING_TASK_TEMPLATE_LIST_COLUMNS).order_by(models.CleaningTaskTemplateList.id.asc())
            )
            if result.rowcount == 0:
                raise ServerError("There are no cleaning task template lists stored in the system", 404)
            return result.rows

    # Cleaning task templates and areas

    def create_cleaning_task_template(
        self,
        cleaning_task_template_description: str,
        area_id: Optional[int] = None,
        area_description: Optional[str] = None
    ) -> int:
        return self.cleaning_task_template_lists.create_template(
            cleaning_task_template_description,
            resolve_area_source(area_id, area_description)
        )

    def get_cleaning_task_templates(self) -> List[dict]:
        with classify_errors("An error occurred while retrieving cleaning task templates"):
            result = self.gateway.execute(
                select_templates_with_area().order_by(models.CleaningTaskTemplate.id.asc())
            )
            if result.rowcount == 0:
                raise ServerError("There are no cleaning task templates stored in the system", 404)
            return result.rows

    def get_areas(self) -> List[dict]:
        with classify_errors("An error occurred while retrieving areas"):
            result = self.gateway.execute(
                select(
                    models.Area.id.label("area_id"),
                    models.Area.description.label("area_description")
                ).order_by(models.Area.id.asc())
            )
            if result.rowcount == 0:
                raise ServerError("There are no areas stored in the system", 404)
            return result.rows

    # Cleaning task lists

    def create_cleaning_task_list(
        self, cleaning_task_template_list_id: int, date: date, staff_member_id: Optional[int] = None
    ) -> int:
        return self.cleaning_task_lists.create(cleaning_task_template_list_id, date, staff_member_id)

    def view_cleaning_task_list(self, cleaning_task_list_id: int) -> dict:
        return self.cleaning_task_lists.get(cleaning_task_list_id)

    def get_cleaning_task_lists(self) -> List[dict]:
        with classify_errors("An error occurred while retrieving cleaning task lists"):
            result = self.gateway.execute(
                select(*CLEANING_TASK_LIST_COLUMNS).order_by(models.CleaningTaskList.id.asc())
            )
            if result.rowcount == 0:
                raise ServerError("There are no cleaning task lists stored in the system", 404)
            return result.rows

    def sign_off_cleaning_task_list_manager(self, cleaning_task_list_id: int, signature: str) -> str:
        return self.cleaning_task_lists.set_manager_signature(cleaning_task_list_id, signature)

    def sign_off_cleaning_task_list_staff_member(self, cleaning_task_list_id: int, signature: str) -> str:
        return self.cleaning_task_lists.set_staff_member_signature(cleaning_task_list_id, signature)

    def delete_cleaning_task_list(self, cleaning_task_list_id: int) -> str:
        return self.cleaning_task_lists.delete(cleaning_task_list_id)

    def get_cleaning_tasks(self, cleaning_task_list_id: int) -> List[dict]:
        return self.cleaning_task_lists.list_tasks(cleaning_task_list_id)

    def assign_staff_member_to_cleaning_task_list(self, cleaning_task_list_id: int, staff_member_id: int) -> str:
        return self.cleaning_task_lists.assign_staff_member(cleaning_task_list_id, staff_member_id)

    # Cleaning tasks

    def add_cleaning_task_to_cleaning_task_list(
        self,
        cleaning_task_list_id: int,
        cleaning_task_template_id: Optional[int] = None,
        cleaning_task_description: Optional[str] = None,
        area_description: Optional[str] = None,
        area_id: Optional[int] = None
    ) -> int:
        source = resolve_task_source(
            cleaning_task_template_id, cleaning_task_description, area_description, area_id
        )
        return self.cleaning_task_lists.create_task(cleaning_task_list_id, source)

    def remove_cleaning_task_from_cleaning_task_list(self, cleaning_task_id: int) -> str:
        return self.cleaning_tasks.delete(cleaning_task_id)

    def mark_cleaning_task_as_complete(self, cleaning_task_list_id: int, cleaning_task_id: int) -> str:
        self._check_task_in_list(cleaning_task_list_id, cleaning_task_id)
        return self.cleaning_task_lists.mark_complete(cleaning_task_id)

    def mark_cleaning_task_as_incomplete(self, cleaning_task_list_id: int, cleaning_task_id: int) -> str:
        self._check_task_in_list(cleaning_task_list_id, cleaning_task_id)
        return self.cleaning_task_lists.mark_incomplete(cleaning_task_id)

    def _check_task_in_list(self, cleaning_task_list_id: int, cleaning_task_id: int):
        check_integer(cleaning_task_list_id, "cleaning_task_list_id")
        check_integer(cleaning_task_id, "cleaning_task_id")

        with classify_errors("An unexpected error occurred"):
            result = self.gateway.execute(
                select(models.CleaningTask.id).where(
                    models.CleaningTask.id == cleaning_task_id,
                    models.CleaningTask.cleaning_task_list_id == cleaning_task_list_id
                )
            )
            if result.rowcount == 0:
                raise ServerError(
                    "The cleaning task specified is not part of the cleaning task list specified", 404
                )

    # Staff members

    def get_staff_members(self) -> List[dict]:
        if self.staff_members is None:
            raise ServerError("The staff directory is not configured", 500)
        return self.staff_members.get_staff_members()
