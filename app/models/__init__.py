from app.models.base import Base  # noqa: F401

from app.models.agent import Agent  # noqa: F401
from app.models.list_item import ListItem  # noqa: F401
