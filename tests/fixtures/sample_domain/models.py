from dataclasses import dataclass, field
from typing import Collection


@dataclass
class Exercise:
    name: str = ""
    description: str = ""
    difficulty: int = 0


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str = ""
    exercises: Collection[Exercise] = field(default_factory=list)


@dataclass
class Group:
    name: str = ""
    users: Collection[User] = field(default_factory=list)
