"""
Base classes for diagram layout modes.

This module provides abstract base classes that define the common interface
and shared functionality for all layout modes:

- BaseLayout: Abstract base with event system, node/link management
- IterativeLayout: For simulations with a tick loop and annealing temperature
- StaticLayout: For single-pass layouts (grid fill, organic, hierarchical)
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Event,
    EventType,
    HandleSide,
    Link,
    LinkLike,
    Node,
    NodeLike,
)
from .validation import (
    filter_links,
    link_endpoints,
    validate_iterations,
    validate_unit_interval,
)


class BaseLayout(ABC):
    """
    Abstract base class for all layout modes.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Node/link management via properties
    - Explicit random source
    - Filtering of links that reference unknown nodes

    Example:
        layout = SomeLayout(
            nodes=["a", "b", "c"],
            links=[("a", "b")],
        )
        layout.run()

        for node in layout.nodes:
            print(f"{node.id}: ({node.x}, {node.y})")
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            nodes: Nodes (Node objects, dicts with 'id', bare ids, or objects)
            links: Links (Link objects, dicts, (source, target) pairs, or objects)
            random_seed: Seed for a private random source
            rng: Explicit random source; takes precedence over random_seed
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._nodes: list[Node] = []
        self._links: list[Link] = []
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        self._random_seed: Optional[int] = random_seed
        self._rng: Optional[random.Random] = rng
        self._seeded_rng: Optional[random.Random] = None

        if nodes is not None:
            self.nodes = nodes
        if links is not None:
            self.links = links

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from Node objects, dicts, bare ids, or objects with an id."""
        self._nodes = []
        for node_data in value:
            if isinstance(node_data, Node):
                self._nodes.append(node_data)
            elif isinstance(node_data, dict):
                self._nodes.append(Node(**node_data))
            elif isinstance(node_data, (str, int)):
                self._nodes.append(Node(str(node_data)))
            else:
                # Generic object - copy public attributes
                node = Node(getattr(node_data, "id"))
                for attr in dir(node_data):
                    if not attr.startswith("_") and not hasattr(node, attr):
                        setattr(node, attr, getattr(node_data, attr))
                self._nodes.append(node)

    @property
    def links(self) -> list[Link]:
        """Get the list of links."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        """
        Set links from Link objects, dicts, pairs, or objects.

        Links without both endpoints are dropped here; links to unknown
        ids are kept and filtered when a layout runs.
        """
        self._links = []
        for link_data in value:
            if isinstance(link_data, Link):
                self._links.append(link_data)
                continue
            pair = link_endpoints(link_data)
            if pair is None:
                continue
            if isinstance(link_data, dict):
                extras = {
                    key: val for key, val in link_data.items() if key not in ("source", "target")
                }
                self._links.append(Link(*pair, **extras))
            else:
                self._links.append(Link(*pair))

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible layouts."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed for reproducible layouts."""
        self._random_seed = value
        self._seeded_rng = None

    @property
    def rng(self) -> random.Random:
        """
        Get the random source used by this layout.

        An explicit source is returned as is. Otherwise a private
        ``random.Random`` seeded with ``random_seed`` is used, so the
        module-level generator is never touched. The private source is
        reseeded at the start of every run.
        """
        if self._rng is not None:
            return self._rng
        if self._seeded_rng is None:
            self._seeded_rng = random.Random(self._random_seed)
        return self._seeded_rng

    @rng.setter
    def rng(self, value: Optional[random.Random]) -> None:
        """Set an explicit random source."""
        self._rng = value

    def _reseed(self) -> None:
        """Drop the private random source so the next draw starts from random_seed."""
        self._seeded_rng = None

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _node_ids(self) -> list[str]:
        """Get node ids in input order."""
        return [node.id for node in self._nodes]

    def _valid_links(self) -> list[tuple[str, str]]:
        """Get (source, target) pairs whose endpoints are both known nodes."""
        return filter_links(self._links, self._node_ids())

    def _set_handles(self, target: HandleSide) -> None:
        """Annotate every node with its incoming side and the opposite outgoing side."""
        source = target.opposite()
        for node in self._nodes:
            node.target_position = target
            node.source_position = source


class IterativeLayout(BaseLayout):
    """
    Base class for simulations driven by a tick loop.

    Provides:
    - Annealing temperature with geometric cooling
    - Fixed iteration budget

    Subclasses implement tick(), returning True to stop early.
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # IterativeLayout-specific parameters
        temperature: float = 1.0,
        cooling_factor: float = 0.99,
        iterations: int = 300,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            nodes: Nodes
            links: Links
            random_seed: Seed for a private random source
            rng: Explicit random source
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            temperature: Initial annealing temperature
            cooling_factor: Temperature decay per iteration (0 to 1)
            iterations: Number of iterations
        """
        super().__init__(
            nodes=nodes,
            links=links,
            random_seed=random_seed,
            rng=rng,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._initial_temperature: float = float(temperature)
        self._temperature: float = float(temperature)
        self._cooling_factor: float = validate_unit_interval(
            "cooling_factor", float(cooling_factor)
        )
        self._iterations: int = validate_iterations(int(iterations))
        self._iteration: int = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def temperature(self) -> float:
        """Get current annealing temperature."""
        return self._temperature

    @property
    def cooling_factor(self) -> float:
        """Get temperature decay per iteration."""
        return self._cooling_factor

    @property
    def iterations(self) -> int:
        """Get the iteration budget."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set the iteration budget (minimum 0)."""
        self._iterations = validate_iterations(int(value))

    @property
    def iteration(self) -> int:
        """Get the number of iterations run so far."""
        return self._iteration

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration.

        Returns:
            True if the simulation should stop, False otherwise.
        """
        pass

    def kick(self) -> None:
        """Run tick() until the budget is spent or tick() asks to stop."""
        self._temperature = self._initial_temperature
        self._iteration = 0
        while self._iteration < self._iterations:
            done = self.tick()
            self._iteration += 1
            self._temperature *= self._cooling_factor
            if done:
                break


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layouts.

    Fires the start event, computes positions, fires the end event. An
    empty node list returns immediately without computing or firing.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        if not self._nodes:
            return self

        self._reseed()
        self.trigger({"type": EventType.start})
        self._compute(**kwargs)
        self.trigger({"type": EventType.end})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute node positions.

        Subclasses must implement this to perform the actual layout computation.
        """
        pass


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
]
