"""Shared test fixtures for iRiseHub backend tests."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from common.auth import JWTAuth
from irisehub.config import CloudinaryConfig, SuperAdminCredentials

TEST_JWT_SECRET = "test-secret-do-not-use"


def _make_cursor(docs):
    """
    Motor-like cursor: sort/skip/limit chain synchronously,
    to_list is awaited.
    """
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.skip = MagicMock(return_value=cursor)
    cursor.limit = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


@pytest.fixture
def make_cursor():
    return _make_cursor


@pytest.fixture
def sample_admin_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() and aggregate() return cursors synchronously (not
    # coroutines), so use MagicMock for them. Async methods like find_one,
    # insert_one, count_documents etc. stay as AsyncMock.
    collection.find = MagicMock(return_value=_make_cursor([]))
    collection.aggregate = MagicMock(return_value=_make_cursor([]))
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def jwt_auth():
    return JWTAuth(secret=TEST_JWT_SECRET, token_expire_hours=24)


@pytest.fixture
def super_admin():
    return SuperAdminCredentials(name="Rise Owner", email="owner@irisehub.org")


@pytest.fixture
def cloudinary_config():
    return CloudinaryConfig(
        cloud_name="demo-cloud",
        api_key="123456",
        api_secret="shhh",
        base_folder="irisehub",
    )


@pytest.fixture
def sample_admin_doc(sample_admin_id):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(sample_admin_id),
        "name": "Ada Admin",
        "email": "ada@irisehub.org",
        "passwordHash": "$2b$12$notarealhashnotarealhashnotarealhashnotarealhashnot",
        "role": "admin",
        "isActive": True,
        "lastLogin": None,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_story_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "name": "Grace",
        "number": "08031234567",
        "email": "grace@example.com",
        "storyTitle": "From intern to lead",
        "description": "How the mentorship programme changed my career.",
        "image": None,
        "video": None,
        "status": "pending",
        "rejectedReason": None,
        "approvedBy": None,
        "approvedAt": None,
        "views": 0,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_event_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "title": "Women in Tech Summit",
        "shortDescription": "A day of talks and workshops.",
        "fullDescription": "Speakers from across the industry share their journeys.",
        "image": None,
        "type": "Coming Soon",
        "youtubeLink": None,
        "author": "iRise Team",
        "speakerType": "multiple",
        "speakers": ["Jane Doe", "Amina Bello"],
        "eventDate": now,
        "eventTime": "10:00",
        "location": "Lagos",
        "isPublished": True,
        "publishedAt": now,
        "views": 3,
        "likes": 0,
        "createdAt": now,
        "updatedAt": now,
    }
