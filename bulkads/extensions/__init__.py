# bulkads/extensions/__init__.py

from flask_cors import CORS
from .db import db

# Only app-aware extensions should be global
cors = CORS()

__all__ = [
    "cors",
    "db",
]
