"""Creational reference implementations: singleton, factory, abstract factory,
builder, object pool, prototype.

Everything the classic examples print is returned as data instead.
"""
import copy
from typing import Any, Callable, Dict, List, Optional

from ..categories import PatternCategory
from ..settings import settings


# ---------------------------------------------------------------- singleton

def singleton_factory(create: Callable[[], Any]) -> Callable[[], Any]:
    """Wrap `create` so every call returns the instance built by the first one.

    The instance lives in this closure, so each registered factory owns its own
    guarantee and nothing is cached at module level.
    """
    holder: List[Any] = []

    def get_instance():
        if not holder:
            holder.append(create())
        return holder[0]

    return get_instance


class DefaultInstance:
    pattern_category = PatternCategory.SINGLETON

    def __init__(self, value: str = "I am the instance"):
        self.value = value

    def describe(self) -> str:
        return self.value


class DatabaseConnection:
    pattern_category = PatternCategory.SINGLETON

    def __init__(self, config: Dict[str, Any]):
        self.config = dict(config)
        self.is_connected = False
        self.log: List[str] = []
        self.connect()

    def connect(self) -> str:
        line = f"Connected to database: {self.config.get('database_name')}"
        self.is_connected = True
        self.log.append(line)
        return line

    def query(self, sql: str) -> str:
        if not self.is_connected:
            return "Not connected to the database."
        line = f"Executing query: {sql}"
        self.log.append(line)
        return line


class Logger:
    pattern_category = PatternCategory.SINGLETON

    def __init__(self):
        self.logs: List[str] = []

    def log(self, message: str) -> str:
        self.logs.append(message)
        return f"Log: {message}"

    def display_logs(self) -> List[str]:
        return list(self.logs)


DEFAULT_DB_CONFIG = {
    "database_name": "mydb",
    "host": "localhost",
    "user": "username",
}


# ------------------------------------------------------------------ factory

class Dog:
    def __init__(self, name: str):
        self.name = name

    def speak(self) -> str:
        return "Woof!"


class Cat:
    def __init__(self, name: str):
        self.name = name

    def speak(self) -> str:
        return "Meow!"


class AnimalFactory:
    pattern_category = PatternCategory.FACTORY
    kinds = ("dog", "cat")

    def create(self, kind: str, name: str = "Buddy"):
        if kind == "dog":
            return Dog(name)
        if kind == "cat":
            return Cat(name)
        raise ValueError(f"Invalid animal type: {kind}")


class Circle:
    def __init__(self, radius: float = 5):
        self.radius = radius

    def draw(self) -> str:
        return f"Drawing a circle with radius {self.radius}"


class Square:
    def __init__(self, side_length: float = 4):
        self.side_length = side_length

    def draw(self) -> str:
        return f"Drawing a square with side length {self.side_length}"


class Triangle:
    def __init__(self, base: float = 3, height: float = 6):
        self.base = base
        self.height = height

    def draw(self) -> str:
        return f"Drawing a triangle with base {self.base} and height {self.height}"


class ShapeFactory:
    pattern_category = PatternCategory.FACTORY
    kinds = ("circle", "square", "triangle")

    _shapes = {"circle": Circle, "square": Square, "triangle": Triangle}

    def create(self, kind: str, *args):
        shape = self._shapes.get(kind)
        if shape is None:
            raise ValueError(f"Unsupported shape type: {kind}")
        return shape(*args)

    def draw(self, kind: str, *args) -> str:
        return self.create(kind, *args).draw()


# --------------------------------------------------------- abstract factory

class _Furniture:
    family = ""
    piece = ""

    def sit(self) -> str:
        return f"Sitting on a {self.family} {self.piece}"


class ModernChair(_Furniture):
    family, piece = "modern", "chair"


class ModernSofa(_Furniture):
    family, piece = "modern", "sofa"


class VintageChair(_Furniture):
    family, piece = "vintage", "chair"


class VintageSofa(_Furniture):
    family, piece = "vintage", "sofa"


class ModernFurnitureFactory:
    pattern_category = PatternCategory.ABSTRACT_FACTORY
    family = "modern"
    products = ("chair", "sofa")

    def create_chair(self):
        return ModernChair()

    def create_sofa(self):
        return ModernSofa()

    def furnish(self) -> List[str]:
        return [self.create_chair().sit(), self.create_sofa().sit()]


class VintageFurnitureFactory:
    pattern_category = PatternCategory.ABSTRACT_FACTORY
    family = "vintage"
    products = ("chair", "sofa")

    def create_chair(self):
        return VintageChair()

    def create_sofa(self):
        return VintageSofa()

    def furnish(self) -> List[str]:
        return [self.create_chair().sit(), self.create_sofa().sit()]


# ------------------------------------------------------------------ builder

class Meal:
    def __init__(self):
        self.burger: Optional[str] = None
        self.fries: Optional[str] = None
        self.drink: Optional[str] = None

    def display(self) -> List[str]:
        return [f"Burger: {self.burger}", f"Fries: {self.fries}", f"Drink: {self.drink}"]


class MealBuilder:
    pattern_category = PatternCategory.BUILDER

    def __init__(self):
        self.meal = Meal()

    def add_burger(self, burger: str) -> None:
        self.meal.burger = burger

    def add_fries(self, fries: str) -> None:
        self.meal.fries = fries

    def add_drink(self, drink: str) -> None:
        self.meal.drink = drink

    def build(self) -> Meal:
        return self.meal

    def display(self) -> List[str]:
        return self.meal.display()


# -------------------------------------------------------------- object pool

class _BoundedPool:
    """Keeps at most `max_size` released objects; acquire reuses the most recent one."""

    pattern_category = PatternCategory.OBJECT_POOL

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = settings.pool_max_size if max_size is None else int(max_size)
        if self.max_size < 0:
            raise ValueError("max_size must be >= 0")
        self.created = 0
        self.log: List[str] = []
        self._pool: List[Any] = []

    @property
    def available(self) -> int:
        return len(self._pool)

    def _construct(self, *args):
        raise NotImplementedError

    def _reuse(self, obj, *args):
        return obj

    def acquire(self, *args):
        if self._pool:
            return self._reuse(self._pool.pop(), *args)
        self.created += 1
        return self._construct(*args)

    def holds(self, obj) -> bool:
        return any(pooled is obj for pooled in self._pool)

    def release(self, obj) -> bool:
        """Return `obj` to the pool.

        False when it is dropped: the pool is full, or `obj` is already pooled.
        """
        if self.holds(obj) or len(self._pool) >= self.max_size:
            return False
        self._pool.append(obj)
        return True


class PooledConnection:
    def __init__(self, log: List[str]):
        self._log = log
        self.is_open = True
        log.append("Creating a new database connection")

    def query(self, sql: str) -> str:
        line = f"Executing query: {sql}"
        self._log.append(line)
        return line

    def close(self) -> str:
        self.is_open = False
        self._log.append("Closing database connection")
        return "Closing database connection"


class ConnectionPool(_BoundedPool):
    def _construct(self):
        return PooledConnection(self.log)

    def _reuse(self, connection):
        connection.is_open = True
        return connection

    def release(self, connection) -> bool:
        if self.holds(connection):
            return False
        if len(self._pool) < self.max_size:
            connection.close()
        return super().release(connection)

    def query(self, sql: str) -> str:
        connection = self.acquire()
        try:
            return connection.query(sql)
        finally:
            self.release(connection)


class ImageObject:
    def __init__(self, src: str):
        self.src = src

    def display(self) -> str:
        return f"Displaying image: {self.src}"


class ImagePool(_BoundedPool):
    def _construct(self, src: str = "placeholder.png"):
        self.log.append(f"Creating a new image object for: {src}")
        return ImageObject(src)

    def _reuse(self, image, src: str = "placeholder.png"):
        image.src = src
        return image

    def get_image(self, src: str):
        return self.acquire(src)

    def release_image(self, image) -> bool:
        return self.release(image)


# ---------------------------------------------------------------- prototype

class CirclePrototype:
    pattern_category = PatternCategory.PROTOTYPE

    def __init__(self, radius: float = 5):
        self.type = "Circle"
        self.radius = radius

    def clone(self) -> "CirclePrototype":
        return CirclePrototype(self.radius)

    def describe(self) -> Dict[str, Any]:
        return dict(self.__dict__)


class Vehicle:
    pattern_category = PatternCategory.PROTOTYPE

    def __init__(self, type: str = "Car", features: Optional[List[str]] = None):
        self.type = type
        self.features = list(features or [])

    def clone(self) -> "Vehicle":
        return Vehicle(self.type, copy.deepcopy(self.features))

    def add_feature(self, feature: str) -> List[str]:
        self.features.append(feature)
        return list(self.features)

    def describe(self) -> Dict[str, Any]:
        return {"type": self.type, "features": list(self.features)}
