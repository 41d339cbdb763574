from infra.db.roadmap.repository import SqlAlchemyRoadmapRepository

__all__ = ["SqlAlchemyRoadmapRepository"]
