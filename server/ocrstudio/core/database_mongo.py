from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient
import asyncio
from typing import Optional
import logging

from ocrstudio.core.config import settings

# Configure logging
logger = logging.getLogger(__name__)

# MongoDB client
client: Optional[AsyncIOMotorClient] = None


def get_database_url() -> str:
    """Get MongoDB connection URL."""
    if settings.MONGODB_URL:
        return settings.MONGODB_URL

    # Build URL from components
    if settings.MONGODB_USERNAME and settings.MONGODB_PASSWORD:
        auth = f"{settings.MONGODB_USERNAME}:{settings.MONGODB_PASSWORD}@"
    else:
        auth = ""

    return f"mongodb://{auth}{settings.MONGODB_HOST}:{settings.MONGODB_PORT}/{settings.MONGODB_DATABASE}"


async def init_models(database) -> None:
    """Register document models with Beanie on the given database."""
    from ocrstudio.models.task_mongo import Task

    await init_beanie(database=database, document_models=[Task])


async def connect_to_mongo():
    """Create database connection and initialize Beanie."""
    global client

    try:
        database_url = get_database_url()

        client = AsyncIOMotorClient(
            database_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000,
            socketTimeoutMS=20000,
            maxPoolSize=10,
            minPoolSize=1,
            retryWrites=True,
            retryReads=True,
            uuidRepresentation="standard",
        )

        # Test the connection with timeout
        await asyncio.wait_for(client.admin.command('ping'), timeout=5.0)

        await init_models(client[settings.MONGODB_DATABASE])
        logger.info(f"Connected to MongoDB database {settings.MONGODB_DATABASE}")

    except asyncio.TimeoutError:
        logger.error("MongoDB connection timeout")
        raise ConnectionError("MongoDB connection timeout")
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise


async def close_mongo_connection():
    """Close database connection."""
    global client
    if client is not None:
        try:
            client.close()
        finally:
            client = None


def get_database():
    """Get the database instance."""
    if client:
        return client[settings.MONGODB_DATABASE]
    return None
