import logging

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from . import models
from .database import Gateway
from .errors import ServerError, classify_errors
from .validation import check_boolean, check_integer

logger = logging.getLogger(__name__)


def insert_task(db: Session, description: str, cleaning_task_list_id: int, area_id: int) -> int:
    cleaning_task = models.CleaningTask(
        description=description,
        completed=False,
        cleaning_task_list_id=cleaning_task_list_id,
        area_id=area_id
    )
    db.add(cleaning_task)
    db.flush()
    return cleaning_task.id


class CleaningTask:
    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def set_completed(self, cleaning_task_id: int, flag: bool) -> str:
        """Set the completed flag. Does not check that the task exists; callers read it first."""
        check_integer(cleaning_task_id, "cleaning_task_id")
        check_boolean(flag, "flag")

        with classify_errors("An error occurred. Check that cleaning_task_id is a valid cleaning task identifier"):
            self.gateway.execute(
                update(models.CleaningTask)
                .where(models.CleaningTask.id == cleaning_task_id)
                .values(completed=flag)
            )
            logger.info(f"Cleaning task {cleaning_task_id} completed set to {flag}")
            return "update successful"

    def delete(self, cleaning_task_id: int) -> str:
        check_integer(cleaning_task_id, "cleaning_task_id")

        with classify_errors("An error occurred while deleting the cleaning task"):
            result = self.gateway.execute(
                delete(models.CleaningTask).where(models.CleaningTask.id == cleaning_task_id)
            )
            if result.rowcount == 0:
                raise ServerError("The cleaning task does not exist", 404)
            logger.info(f"Deleted cleaning task {cleaning_task_id}")
            return "deletion successful"
