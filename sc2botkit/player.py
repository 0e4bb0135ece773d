"""The player's resources and what things cost."""

from __future__ import annotations

from dataclasses import dataclass

from sc2botkit.models import Race


@dataclass(frozen=True)
class Cost:
    """The full cost of an ability."""

    minerals: int = 0
    vespene: int = 0
    food: int = 0

    def mul(self, count: int) -> Cost:
        """The cost of doing it ``count`` times."""
        return Cost(self.minerals * count, self.vespene * count, self.food * count)

    __mul__ = mul


@dataclass
class Player:
    """The bot's own player state and what is known about the opponent."""

    player_id: int = 0
    minerals: int = 0
    vespene: int = 0
    food_cap: int = 0
    food_used: int = 0
    race_requested: Race = Race.NO_RACE
    race_actual: Race = Race.NO_RACE
    opponent_id: int = 0
    opponent_race: Race = Race.NO_RACE

    def food_left(self) -> int:
        """Amount under (positive) or over (negative) the food cap."""
        return self.food_cap - self.food_used

    def can_afford(self, cost: Cost) -> bool:
        """Whether the player can currently pay the given cost."""
        return (
            self.minerals >= cost.minerals
            and self.vespene >= cost.vespene
            and (cost.food == 0 or self.food_cap >= self.food_used + cost.food)
        )

    def spend(self, cost: Cost) -> None:
        """Tentatively mark the given resources as unavailable."""
        self.minerals -= cost.minerals
        self.vespene -= cost.vespene
        self.food_used += cost.food