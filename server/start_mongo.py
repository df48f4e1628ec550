#!/usr/bin/env python3
"""
Startup script for the OCR Studio task server (MongoDB).
"""

import argparse
import asyncio
import os
import socket
import sys

# Add current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def check_port_available(port=8000, host="127.0.0.1"):
    """Check if a port is available"""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(1)
            return sock.connect_ex((host, port)) != 0
    except OSError:
        return False


async def check_mongodb_connection():
    """Check MongoDB connection"""
    from motor.motor_asyncio import AsyncIOMotorClient
    from ocrstudio.core.database_mongo import get_database_url

    client = AsyncIOMotorClient(get_database_url(), serverSelectionTimeoutMS=5000)
    try:
        await client.admin.command('ping')
        print("MongoDB connection successful")
        return True
    except Exception as e:
        print(f"MongoDB connection failed: {e}")
        return False
    finally:
        client.close()


def main():
    """Start the server after checking the port and the database."""
    parser = argparse.ArgumentParser(description="Run the OCR Studio task server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--skip-db-check", action="store_true")
    args = parser.parse_args()

    if not check_port_available(args.port, args.host):
        print(f"Port {args.port} is in use. Please stop the process using it.")
        sys.exit(1)

    if not args.skip_db_check and not asyncio.run(check_mongodb_connection()):
        print("MongoDB check failed. Please start MongoDB server.")
        sys.exit(1)

    from ocrstudio.core.config import settings

    print(f"API Documentation: http://{args.host}:{args.port}{settings.API_V1_PREFIX}/docs")

    import uvicorn
    uvicorn.run(
        "ocrstudio.main_mongo:app",
        host=args.host,
        port=args.port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
