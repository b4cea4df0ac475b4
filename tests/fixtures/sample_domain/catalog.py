from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Catalog:
    VERSION: ClassVar[int] = 1

    title: str = ""
    _secret: str = ""
    tags: list[str]

    def __init__(self):
        self.tags = []
        self._owner = ""

    @property
    def size(self) -> int:
        return len(self.tags)

    @property
    def owner(self) -> str:
        return self._owner

    @owner.setter
    def owner(self, value: str):
        self._owner = value


class Level(Enum):
    EASY = 1
    HARD = 2


class Repository(ABC):
    name: str = ""

    @abstractmethod
    def load(self):
        pass


@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0
