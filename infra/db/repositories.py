# infra/db/repositories.py
from infra.db.roadmap.repository import SqlAlchemyRoadmapRepository
from infra.db.task.repository import SqlAlchemyDependencyRepository, SqlAlchemyTaskRepository

__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
    "SqlAlchemyRoadmapRepository",
]
