import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import models
from .database import Gateway
from .errors import classify_errors
from .validation import check_integer

logger = logging.getLogger(__name__)

CLEANING_TASK_TEMPLATE_COLUMNS = (
    models.CleaningTaskTemplate.id.label("cleaning_task_template_id"),
    models.CleaningTaskTemplate.description.label("cleaning_task_template_description"),
    models.CleaningTaskTemplate.area_id,
    models.Area.description.label("area_description"),
)


def select_templates_with_area():
    """SELECT templates joined with the description of their area."""
    return (
        select(*CLEANING_TASK_TEMPLATE_COLUMNS)
        .join(models.Area, models.CleaningTaskTemplate.area_id == models.Area.id)
    )


def insert_area(db: Session, description: str) -> int:
    area = models.Area(description=description)
    db.add(area)
    db.flush()
    logger.info(f"Created area {area.id}: {description}")
    return area.id


def insert_template(db: Session, description: str, area_id: int) -> int:
    template = models.CleaningTaskTemplate(description=description, area_id=area_id)
    db.add(template)
    db.flush()
    logger.info(f"Created cleaning task template {template.id} in area {area_id}")
    return template.id


class CleaningTaskTemplate:
    """Point lookups on cleaning task templates."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def get_description(self, cleaning_task_template_id: int, db: Optional[Session] = None) -> str:
        check_integer(cleaning_task_template_id, "cleaning_task_template_id")

        with classify_errors(
            "An error occurred when retrieving the cleaning task template description. "
            "Check that cleaning_task_template_id is valid"
        ):
            result = self.gateway.execute(
                select(models.CleaningTaskTemplate.description)
                .where(models.CleaningTaskTemplate.id == cleaning_task_template_id),
                db
            )
            return result.rows[0]["description"]

    def get_area(self, cleaning_task_template_id: int, db: Optional[Session] = None) -> int:
        """Return the id of the area the template belongs to."""
        check_integer(cleaning_task_template_id, "cleaning_task_template_id")

        with classify_errors(
            "An error occurred while retrieving the area_id from the cleaning task template. "
            "Check that cleaning_task_template_id is valid"
        ):
            result = self.gateway.execute(
                select(models.CleaningTaskTemplate.area_id)
                .where(models.CleaningTaskTemplate.id == cleaning_task_template_id),
                db
            )
            return result.rows[0]["area_id"]
