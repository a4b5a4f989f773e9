from .guarded_decorator import guarded
from .implements_decorator import implements

__all__ = [
    "guarded",
    "implements",
]
