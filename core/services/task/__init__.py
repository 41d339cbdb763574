from core.services.task.dependency import TaskDependencyService

__all__ = ["TaskDependencyService"]
