from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from .dungeon_gen import GeneratedDungeon
from .event_system import EventBus, Event
from .geometry import Coordinate, manhattan_distance
from .grid import GridModel

if TYPE_CHECKING:
    from .agents import Agent, Player


class Dungeon:
    """
    A generated dungeon at play time.

    The tile layout is frozen; the only mutable state is which agent stands
    on which tile. Moves go through claim_move(), which updates the occupancy
    map and the agent's tile in one step.
    """

    def __init__(
        self,
        generated: GeneratedDungeon,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.generated: GeneratedDungeon = generated
        self.grid: GridModel = generated.grid
        self.exit: Coordinate = generated.exit
        self.start: Coordinate = generated.start

        self.agents: List["Agent"] = []
        self._occupants: Dict[Coordinate, "Agent"] = {}

        # Set via add_agent() when the agent is a Player
        self.player: Optional["Player"] = None

        self.event_bus: Optional[EventBus] = event_bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        """Emit an event if an event bus is configured."""
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    def is_floor(self, coord: Coordinate) -> bool:
        return self.grid.is_floor(coord)

    def occupant_at(self, coord: Coordinate) -> Optional["Agent"]:
        return self._occupants.get(coord)

    def is_tile_walkable(self, coord: Coordinate) -> bool:
        """Floor with nobody standing on it."""
        return self.grid.is_floor(coord) and coord not in self._occupants

    def walkable_for(self, agent: "Agent") -> Callable[[Coordinate], bool]:
        """
        Walkability predicate from one agent's point of view, for pathfinding.

        The agent's own tile and tiles held by agents it is not blocked by
        count as walkable.
        """

        def is_walkable(coord: Coordinate) -> bool:
            if not self.grid.is_floor(coord):
                return False
            occupant = self._occupants.get(coord)
            return occupant is None or occupant is agent or not agent.is_blocked_by(occupant)

        return is_walkable

    def add_agent(self, agent: "Agent") -> None:
        """
        Place an agent on its tile.

        Raises:
            ValueError: If the tile is not free floor or the id is taken.
        """
        from .agents import Player

        if self.find_agent(agent.agent_id) is not None:
            raise ValueError(f"agent {agent.agent_id} already in dungeon")
        if not self.is_tile_walkable(agent.tile):
            raise ValueError(f"cannot place {agent.agent_id} on {agent.tile}")

        self._occupants[agent.tile] = agent
        self.agents.append(agent)
        if isinstance(agent, Player):
            self.player = agent
        self._emit(Event.AGENT_ADDED, agent_id=agent.agent_id)

    def remove_agent(self, agent_id: str) -> bool:
        """
        Cancel and remove an agent by its id.

        Returns True if an agent was removed, False if no agent had that id.
        """
        agent = self.find_agent(agent_id)
        if agent is None:
            return False

        agent.cancel()
        self.agents.remove(agent)
        if self._occupants.get(agent.tile) is agent:
            del self._occupants[agent.tile]
        if agent is self.player:
            self.player = None
        self._emit(Event.AGENT_REMOVED, agent_id=agent_id)
        return True

    def find_agent(self, agent_id: str) -> Optional["Agent"]:
        for agent in self.agents:
            if agent.agent_id == agent_id:
                return agent
        return None

    def claim_move(self, agent: "Agent", destination: Coordinate) -> bool:
        """
        Move an agent's logical position one tile.

        Returns False, changing nothing, if the destination is not a free
        floor tile next to the agent.
        """
        start = agent.tile
        if manhattan_distance(start, destination) != 1:
            return False
        if not self.is_tile_walkable(destination):
            return False
        if self._occupants.get(start) is not agent:
            return False

        del self._occupants[start]
        self._occupants[destination] = agent
        agent.tile = destination

        self._emit(Event.AGENT_MOVED, agent_id=agent.agent_id, start=start, end=destination)
        return True

    def update(self, dt: float) -> None:
        """Advance every agent by one tick."""
        for agent in list(self.agents):
            agent.update(dt, self)

    def reached_exit(self, agent: "Agent") -> None:
        """Called by the player on arriving at the exit tile."""
        self._emit(Event.LEVEL_END, agent_id=agent.agent_id, exit=self.exit)

    def report_attack(self, attacker: "Agent", target: "Agent", hit: bool, damage: int) -> None:
        """Called by enemies when they swing at the player."""
        self._emit(
            Event.ENEMY_ATTACK,
            agent_id=attacker.agent_id,
            target_id=target.agent_id,
            hit=hit,
            damage=damage,
        )
