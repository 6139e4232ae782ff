"""
Failures reported to the host while building a dungeon.

Pathfinding has no error here: a search that gives up leaves the agent
where it is.
"""


class DungeonError(Exception):
    """Base class for dungeon generation failures."""


class ConfigurationError(DungeonError, ValueError):
    """A generation parameter is invalid. Raised before any tile is placed."""

    def __init__(self, parameter: str, message: str) -> None:
        self.parameter = parameter
        super().__init__(f"invalid {parameter}: {message}")


class GenerationStall(DungeonError, RuntimeError):
    """A walk strategy hit its iteration cap before reaching the floor target."""

    def __init__(self, strategy: str, reached: int, target: int, iterations: int) -> None:
        self.strategy = strategy
        self.reached = reached
        self.target = target
        self.iterations = iterations
        super().__init__(
            f"{strategy} walk stalled: {reached}/{target} floor tiles "
            f"after {iterations} iterations"
        )
