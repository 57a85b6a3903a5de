# Import models so Alembic and Base metadata are aware of them
from .auth import User  # noqa: F401
from .documents import StudyDocument  # noqa: F401
from .study import Flashcard, Quiz  # noqa: F401
