"""
Mobile agents: the player and the enemies.

Each agent is a small state machine advanced one tick at a time by
Dungeon.update(). An agent only ever waits at a tick boundary, so
cancelling it between ticks is always safe: its logical tile changes only
inside Dungeon.claim_move(), never halfway through a move.

States:
    - idle: ready to decide the next move
    - moving: sliding its interpolated position toward its tile
    - cooldown: resting after a move or an attack
    - cancelled: removed from play, ignores further ticks
"""

import math
import random
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from .geometry import Coordinate, Direction
from .pathfinding import next_step

if TYPE_CHECKING:
    from .world import Dungeon

# Interpolated positions closer than this to the tile centre count as arrived
ARRIVAL_TOLERANCE: float = 0.01

# Seconds between enemy decisions while idle
THINK_INTERVAL: float = 0.1

# Euclidean distance, in tiles, at which an enemy attacks instead of moving
ATTACK_RANGE: float = 1.1

# Seconds an enemy rests after attacking
ATTACK_PAUSE: float = 0.5


class AgentState(Enum):
    IDLE = auto()
    MOVING = auto()
    COOLDOWN = auto()
    CANCELLED = auto()


class Agent(ABC):
    """Base class holding position, movement and the tick state machine."""

    def __init__(self, agent_id: str, tile: Coordinate, speed: float = 4.0) -> None:
        self.agent_id: str = agent_id

        # Logical tile, only changed through Dungeon.claim_move()
        self.tile: Coordinate = tile

        # Interpolated position in tile units
        self.x: float = float(tile.x)
        self.y: float = float(tile.y)
        self.speed: float = speed  # tiles/sec

        self.state: AgentState = AgentState.IDLE
        self.cooldown_remaining: float = 0.0

    def is_blocked_by(self, other: "Agent") -> bool:
        """Whether `other` standing on a tile keeps this agent out of it."""
        return True

    def cancel(self) -> None:
        self.state = AgentState.CANCELLED

    @property
    def cancelled(self) -> bool:
        return self.state == AgentState.CANCELLED

    def update(self, dt: float, dungeon: "Dungeon") -> None:
        if self.state == AgentState.IDLE:
            self._decide(dt, dungeon)

        elif self.state == AgentState.MOVING:
            if self._move(dt):
                self._on_arrival(dungeon)

        elif self.state == AgentState.COOLDOWN:
            self.cooldown_remaining -= dt
            if self.cooldown_remaining <= 0.0:
                self.cooldown_remaining = 0.0
                self.state = AgentState.IDLE

    @abstractmethod
    def _decide(self, dt: float, dungeon: "Dungeon") -> None:
        """Pick the next action while idle."""
        pass

    def _start_move(self, dungeon: "Dungeon", destination: Coordinate) -> bool:
        if dungeon.claim_move(self, destination):
            self.state = AgentState.MOVING
            return True
        return False

    def _begin_cooldown(self, seconds: float) -> None:
        if seconds <= 0.0:
            self.state = AgentState.IDLE
            return
        self.cooldown_remaining = seconds
        self.state = AgentState.COOLDOWN

    def _on_arrival(self, dungeon: "Dungeon") -> None:
        self._begin_cooldown(0.0)

    def _move(self, dt: float) -> bool:
        """Slide toward the logical tile. Returns True on arrival."""
        move_dist = self.speed * dt

        diff_x = self.tile.x - self.x
        diff_y = self.tile.y - self.y
        dist = math.hypot(diff_x, diff_y)

        if dist <= move_dist or dist <= ARRIVAL_TOLERANCE:
            self.x = float(self.tile.x)
            self.y = float(self.tile.y)
            return True

        self.x += diff_x / dist * move_dist
        self.y += diff_y / dist * move_dist
        return False


class Player(Agent):
    """
    The player's avatar. Moves one tile per request; input handling is up
    to the host, which calls request_move().
    """

    def __init__(self, tile: Coordinate, agent_id: str = "player", speed: float = 6.0) -> None:
        super().__init__(agent_id, tile, speed=speed)
        self._pending: Optional[Direction] = None

    def request_move(self, direction: Direction) -> None:
        """Queue a one-tile step, applied on the next idle tick."""
        self._pending = direction

    def _decide(self, dt: float, dungeon: "Dungeon") -> None:
        if self._pending is None:
            return
        direction, self._pending = self._pending, None
        # Walls and enemies both block; a blocked request is simply dropped
        self._start_move(dungeon, self.tile.step(direction))

    def _on_arrival(self, dungeon: "Dungeon") -> None:
        self._begin_cooldown(0.0)
        if self.tile == dungeon.exit:
            dungeon.reached_exit(self)


class Enemy(Agent):
    """
    An enemy that patrols at random and closes in on the player when near.

    While idle it thinks every THINK_INTERVAL seconds:
    - player within alert_range and ATTACK_RANGE: attack and rest for ATTACK_PAUSE
    - player within alert_range only: take the next step of a path to the player
    - otherwise, or if no step was found: wander to a random open neighbour
    Every move is followed by a random cooldown of 1 to 4 seconds.
    """

    def __init__(
        self,
        agent_id: str,
        tile: Coordinate,
        catalog_index: int = 0,
        alert_range: float = 5.0,
        speed: float = 3.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(agent_id, tile, speed=speed)
        self.catalog_index: int = catalog_index
        self.alert_range: float = alert_range
        self._think_timer: float = 0.0
        self._rng: random.Random = rng or random.Random()

    def is_blocked_by(self, other: Agent) -> bool:
        # Only other enemies block path planning; the player is the target
        return isinstance(other, Enemy)

    def distance_to(self, other: Agent) -> float:
        return math.hypot(other.tile.x - self.tile.x, other.tile.y - self.tile.y)

    def _decide(self, dt: float, dungeon: "Dungeon") -> None:
        self._think_timer += dt
        if self._think_timer < THINK_INTERVAL:
            return
        self._think_timer = 0.0

        player = dungeon.player
        if player is not None and not player.cancelled:
            distance = self.distance_to(player)
            if distance <= self.alert_range:
                if distance <= ATTACK_RANGE:
                    self._attack(player, dungeon)
                    return
                step = next_step(self.tile, player.tile, dungeon.walkable_for(self))
                if step != self.tile and self._start_move(dungeon, step):
                    return

        self._patrol(dungeon)

    def _patrol(self, dungeon: "Dungeon") -> None:
        options = [c for c in self.tile.neighbors() if dungeon.is_tile_walkable(c)]
        if options and self._start_move(dungeon, options[self._rng.randrange(len(options))]):
            return
        # Boxed in: rest anyway so we don't re-plan every tick
        self._begin_cooldown(self._cooldown_seconds())

    def _attack(self, target: Agent, dungeon: "Dungeon") -> None:
        hit = self._rng.randint(0, 99) > 50
        damage = self._rng.randint(0, 99) if hit else 0
        dungeon.report_attack(self, target, hit, damage)
        self._begin_cooldown(ATTACK_PAUSE)

    def _cooldown_seconds(self) -> float:
        return float(self._rng.randint(1, 4))

    def _on_arrival(self, dungeon: "Dungeon") -> None:
        self._begin_cooldown(self._cooldown_seconds())
