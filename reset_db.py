from lcms_cleaning import config
from lcms_cleaning.database import Gateway
from lcms_cleaning.seed_data import seed_database
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database():
    gateway = Gateway.from_url(config.DATABASE_URL)

    try:
        logger.info("Dropping all tables...")
        gateway.drop_all()
        logger.info("All tables dropped successfully!")

        logger.info("Creating new tables...")
        gateway.create_all()

        gateway.execute_transaction(seed_database)
        logger.info("Database seeded successfully!")
    except Exception as e:
        logger.error(f"Error resetting database: {e}")
        raise
    finally:
        gateway.dispose()


if __name__ == "__main__":
    reset_database()
