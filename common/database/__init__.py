"""
Database module - Generic async MongoDB connection using Motor.

Usage:
    from common.database import MongoDB, parse_object_id

    db = MongoDB()
    await db.connect(uri, database_name)
    collection = db.get_collection("admins")
"""

from common.database.mongodb import MongoDB
from common.database.ids import parse_object_id, utcnow

__all__ = ["MongoDB", "parse_object_id", "utcnow"]
