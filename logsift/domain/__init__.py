from .projects.models import Project
from .launches.models import Launch
from .items.models import TestItem
from .logs.models import Attachment
from .logs.models import Log

__all__ = [
    "Project",
    "Launch",
    "TestItem",
    "Attachment",
    "Log",
]
