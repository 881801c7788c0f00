from .scenario import Scenario

__all__ = ["Scenario"]
