from lcms_cleaning import config
from lcms_cleaning.database import Gateway
from lcms_cleaning.seed_data import seed_if_empty
import time
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_database():
    gateway = Gateway.from_url(
        config.DATABASE_URL,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW
    )

    # Retry while the database comes up
    max_retries = 5
    try:
        for attempt in range(max_retries):
            try:
                logger.info(f"Attempting database initialization (attempt {attempt + 1}/{max_retries})")
                gateway.create_all()

                if seed_if_empty(gateway):
                    logger.info("Database seeded successfully!")
                break
            except Exception as e:
                logger.error(f"Database initialization failed: {e}")
                if attempt < max_retries - 1:
                    logger.info("Retrying in 5 seconds...")
                    time.sleep(5)
                else:
                    logger.error("All database initialization attempts failed")
                    raise
    finally:
        gateway.dispose()


if __name__ == "__main__":
    init_database()
