"""
Pydantic schemas for API request/response validation.
"""

from .common import *
from .fire import *
from .destination import *
from .route import *
