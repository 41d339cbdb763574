from core.services.roadmap.projector import EpicTimeline, build_roadmap, project_epic_bounds
from core.services.roadmap.service import RoadmapService

__all__ = ["EpicTimeline", "build_roadmap", "project_epic_bounds", "RoadmapService"]
