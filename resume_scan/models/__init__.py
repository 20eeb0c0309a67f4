# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import resume

# Explicit class exports for cleaner imports
from .resume import Resume

__all__ = [
    "Resume",
]
