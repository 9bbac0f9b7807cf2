"""
iRiseHub Schemas.

Pydantic models for request validation.
"""

from irisehub.schemas.admin import *
from irisehub.schemas.story import *
from irisehub.schemas.booking import *
