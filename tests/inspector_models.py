"""Object models inspected by the tests."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Annotated, List, Optional

from pyqt_polyform.forms.field_config import FieldConfig, inspector_field


class IPerson(ABC):
    """Marker interface: no abstract methods, ABC as direct base."""


@dataclass
class Student(IPerson):
    student_count: int = 0
    name: str = ""


@dataclass
class Teacher(IPerson):
    """No zero-argument constructor."""
    teach_id: int
    subject: str

    def __post_init__(self):
        self.initialized = True


class Pet(ABC):
    @abstractmethod
    def speak(self) -> str:
        ...


@dataclass
class Dog(Pet):
    name: str = "Rex"

    def speak(self) -> str:
        return "woof"


@dataclass
class Settings:
    volume: int = 5
    muted: bool = False


@dataclass
class Player:
    health: Annotated[int, FieldConfig(proxy_accessor_name="hp")] = 0
    armor: Annotated[int, FieldConfig(can_write=False, proxy_accessor_name="armor_rating")] = 0
    person: Optional[IPerson] = None
    locked: Annotated[Optional[IPerson], FieldConfig(can_write=False)] = None
    settings: Settings = inspector_field(default_factory=Settings, can_write=False, display_name="Options")

    @property
    def hp(self) -> int:
        return self.health

    @hp.setter
    def hp(self, value: int) -> None:
        self.health = max(0, min(100, value))

    @property
    def armor_rating(self) -> int:
        return 7


@dataclass
class School:
    principal: Optional[IPerson] = None
    people: List[IPerson] = field(default_factory=list)


@dataclass
class Node:
    value: int = 0
    next: Optional["Node"] = None
