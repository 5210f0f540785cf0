import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from . import models
from .cleaning_task_template import insert_area, insert_template
from .cleaning_task_template_list import insert_link
from .database import Gateway

logger = logging.getLogger(__name__)

# Areas of the centre and the cleaning task templates belonging to each
CLEANING_TASK_TEMPLATES = [
    ("Changing Rooms", [
        "Mop changing room floors",
        "Empty changing room bins",
        "Restock toilet paper and hand soap",
        "Wipe down benches and lockers"
    ]),
    ("Pool Side", [
        "Hose down pool surround",
        "Check and tidy lane ropes and floats",
        "Wipe down lifeguard chairs"
    ]),
    ("Gym", [
        "Wipe down cardio machines",
        "Re-rack free weights",
        "Vacuum gym floor"
    ]),
    ("Reception", [
        "Clean reception desk and card readers",
        "Empty reception bins",
        "Clean front entrance glass"
    ]),
]

TEMPLATE_LISTS = [
    ("Mondays AM", ["Mop changing room floors", "Empty changing room bins", "Hose down pool surround",
                    "Wipe down cardio machines", "Clean reception desk and card readers"]),
    ("Weekend Close", ["Restock toilet paper and hand soap", "Check and tidy lane ropes and floats",
                       "Re-rack free weights", "Vacuum gym floor", "Empty reception bins"]),
]


def seed_database(db: Session):
    """Seed the database with demonstration areas, templates and template lists."""
    logger.info("Starting database seeding...")

    template_ids = {}
    for area_description, descriptions in CLEANING_TASK_TEMPLATES:
        area_id = insert_area(db, area_description)
        for description in descriptions:
            template_ids[description] = insert_template(db, description, area_id)

    for title, descriptions in TEMPLATE_LISTS:
        template_list = models.CleaningTaskTemplateList(title=title)
        db.add(template_list)
        db.flush()
        for description in descriptions:
            insert_link(db, template_list.id, template_ids[description])

    logger.info(
        f"Seeded {len(CLEANING_TASK_TEMPLATES)} areas, {len(template_ids)} cleaning task templates "
        f"and {len(TEMPLATE_LISTS)} cleaning task template lists"
    )


def seed_if_empty(gateway: Gateway) -> bool:
    """Seed only when no areas exist yet. Returns whether seeding happened."""
    def body(db: Session) -> bool:
        count = db.execute(select(func.count()).select_from(models.Area)).scalar()
        logger.info(f"Found {count} areas in database")
        if count:
            logger.info(f"Database already contains {count} areas, skipping seeding")
            return False
        seed_database(db)
        return True

    return gateway.execute_transaction(body)
