from .task import Priority, Task

__all__ = ["Priority", "Task"]
