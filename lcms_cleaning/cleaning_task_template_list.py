import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from . import models
from .cleaning_task_template import insert_area, insert_template, select_templates_with_area
from .database import Gateway
from .errors import ServerError, classify_errors
from .sources import AreaSource, ExistingArea, NewArea
from .validation import check_integer, check_integer_list, check_non_empty_string

logger = logging.getLogger(__name__)

Link = models.CleaningTaskTemplateListToCleaningTaskTemplate

CLEANING_TASK_TEMPLATE_LIST_COLUMNS = (
    models.CleaningTaskTemplateList.id.label("cleaning_task_template_list_id"),
    models.CleaningTaskTemplateList.title,
)


def insert_link(db: Session, cleaning_task_template_list_id: int, cleaning_task_template_id: int):
    db.add(Link(
        cleaning_task_template_list_id=cleaning_task_template_list_id,
        cleaning_task_template_id=cleaning_task_template_id
    ))
    db.flush()


class CleaningTaskTemplateList:
    """
    A named checklist blueprint made of cleaning task templates.

    Templates are linked through the join table in the order they were
    added; the same template can only be linked to a list once.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def create(self, title: str, cleaning_task_templates: List[int]) -> int:
        """
        Create a template list and link `cleaning_task_templates` to it.

        The list row and every link are written in one transaction, so an
        unknown template id leaves nothing behind.
        """
        check_non_empty_string(title, "title")
        check_integer_list(cleaning_task_templates, "cleaning_task_templates")
        if len(set(cleaning_task_templates)) != len(cleaning_task_templates):
            raise ServerError("cleaning_task_templates must not contain duplicates", 400)

        def body(db: Session) -> int:
            template_list = models.CleaningTaskTemplateList(title=title)
            db.add(template_list)
            db.flush()

            for cleaning_task_template_id in cleaning_task_templates:
                insert_link(db, template_list.id, cleaning_task_template_id)

            return template_list.id

        logger.info(f"Creating cleaning task template list '{title}' with templates {list(cleaning_task_templates)}")
        with classify_errors("An error occurred while creating the new cleaning task template list"):
            return self.gateway.execute_transaction(body)

    def get(self, cleaning_task_template_list_id: int) -> dict:
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")

        with classify_errors("An error occurred while retrieving the cleaning task template list"):
            result = self.gateway.execute(
                select(*CLEANING_TASK_TEMPLATE_LIST_COLUMNS)
                .where(models.CleaningTaskTemplateList.id == cleaning_task_template_list_id)
            )
            if result.rowcount == 0:
                raise ServerError(
                    f"There are no cleaning task template lists with the id of {cleaning_task_template_list_id}",
                    404
                )
            return result.rows[0]

    def add_template(self, cleaning_task_template_list_id: int, cleaning_task_template_id: int) -> str:
        """Link an existing template to the list. Linking the same pair twice fails with a 400."""
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")
        check_integer(cleaning_task_template_id, "cleaning_task_template_id")

        def body(db: Session) -> str:
            existing = self.gateway.execute(
                select(Link.id).where(
                    Link.cleaning_task_template_list_id == cleaning_task_template_list_id,
                    Link.cleaning_task_template_id == cleaning_task_template_id
                ),
                db
            )
            if existing.rowcount > 0:
                raise ServerError(
                    "The cleaning task template list already contains the cleaning task template", 400
                )
            insert_link(db, cleaning_task_template_list_id, cleaning_task_template_id)
            return "cleaning task template added successfully"

        with classify_errors(
            "An error occurred while adding the cleaning task template to the cleaning task template list"
        ):
            return self.gateway.execute_transaction(body)

    def create_template(self, cleaning_task_template_description: str, area: AreaSource,
                        cleaning_task_template_list_id: Optional[int] = None) -> int:
        """
        Create a cleaning task template.

        `area` either references an existing area or describes a new one to
        create alongside the template. When `cleaning_task_template_list_id`
        is given the new template is also linked to that list. All writes
        happen in one transaction.
        """
        check_non_empty_string(cleaning_task_template_description, "cleaning_task_template_description")

        if cleaning_task_template_list_id is not None:
            check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")

        if isinstance(area, ExistingArea):
            check_integer(area.area_id, "area_id")
        elif isinstance(area, NewArea):
            check_non_empty_string(area.area_description, "area_description")
        else:
            raise ServerError("Invalid arguments supplied", 400)

        def body(db: Session) -> int:
            if isinstance(area, NewArea):
                area_id = insert_area(db, area.area_description)
            else:
                area_id = area.area_id

            cleaning_task_template_id = insert_template(db, cleaning_task_template_description, area_id)

            if cleaning_task_template_list_id is not None:
                insert_link(db, cleaning_task_template_list_id, cleaning_task_template_id)

            return cleaning_task_template_id

        with classify_errors("An error occurred while creating the new cleaning task template"):
            return self.gateway.execute_transaction(body)

    def remove_template(self, cleaning_task_template_list_id: int, cleaning_task_template_id: int) -> str:
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")
        check_integer(cleaning_task_template_id, "cleaning_task_template_id")

        with classify_errors(
            "An error occurred while removing the cleaning task template from the cleaning task template list"
        ):
            result = self.gateway.execute(
                delete(Link).where(
                    Link.cleaning_task_template_list_id == cleaning_task_template_list_id,
                    Link.cleaning_task_template_id == cleaning_task_template_id
                )
            )
            if result.rowcount == 0:
                raise ServerError(
                    "The cleaning task template list does not contain the cleaning task template", 404
                )
            return "removal successful"

    def delete(self, cleaning_task_template_list_id: int) -> str:
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")

        with classify_errors("An error occurred while deleting the cleaning task template list"):
            result = self.gateway.execute(
                delete(models.CleaningTaskTemplateList)
                .where(models.CleaningTaskTemplateList.id == cleaning_task_template_list_id)
            )
            if result.rowcount == 0:
                raise ServerError("The cleaning task template list does not exist", 404)
            logger.info(f"Deleted cleaning task template list {cleaning_task_template_list_id}")
            return "deletion successful"

    def list_template_ids(self, cleaning_task_template_list_id: int, db: Optional[Session] = None) -> List[int]:
        """Ids of the templates linked to the list, in the order they were linked."""
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")

        with classify_errors("An error occurred while retrieving cleaning task template ids"):
            result = self.gateway.execute(
                select(Link.cleaning_task_template_id)
                .where(Link.cleaning_task_template_list_id == cleaning_task_template_list_id)
                .order_by(Link.id),
                db
            )
            if result.rowcount == 0:
                raise ServerError(
                    "There are no cleaning task templates linked to the cleaning task template list", 404
                )
            return [row["cleaning_task_template_id"] for row in result.rows]

    def list_templates_with_detail(self, cleaning_task_template_list_id: int) -> List[dict]:
        check_integer(cleaning_task_template_list_id, "cleaning_task_template_list_id")

        with classify_errors("An error occurred while retrieving the cleaning task templates"):
            cleaning_task_templates = []
            for cleaning_task_template_id in self.list_template_ids(cleaning_task_template_list_id):
                result = self.gateway.execute(
                    select_templates_with_area()
                    .where(models.CleaningTaskTemplate.id == cleaning_task_template_id)
                )
                cleaning_task_templates.append(result.rows[0])
            return cleaning_task_templates
