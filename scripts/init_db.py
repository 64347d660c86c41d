"""
Database initialization script.

Run this script to create database tables on a fresh database.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.db.init_db import init_db

if __name__ == "__main__":
    try:
        init_db()
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        sys.exit(1)

    logger.info("Database initialized")
