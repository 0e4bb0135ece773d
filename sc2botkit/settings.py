"""Player setups and port configuration for starting a game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from sc2botkit.models import Race


class PlayerType(IntEnum):
    PARTICIPANT = 1
    COMPUTER = 2
    OBSERVER = 3


@dataclass
class PortSet:
    """A game port and a base port."""

    game_port: int = -1
    base_port: int = -1

    def is_valid(self) -> bool:
        return self.game_port > 0 and self.base_port > 0


@dataclass
class Ports:
    """Ports used to join a multiplayer game; unset ports are -1."""

    server_ports: PortSet | None = field(default_factory=PortSet)
    client_ports: list[PortSet] = field(default_factory=list)
    shared_port: int = -1

    def is_valid(self) -> bool:
        """Whether every port needed for a multiplayer join is set."""
        if (
            self.shared_port < 1
            or self.server_ports is None
            or not self.server_ports.is_valid()
            or not self.client_ports
        ):
            return False
        return all(ps is not None and ps.is_valid() for ps in self.client_ports)


@dataclass
class PlayerSetup:
    """One slot in a game: a bot, a built-in computer or an observer."""

    type: PlayerType
    race: Race = Race.NO_RACE
    difficulty: int = 0
    ai_build: int = 0
    player_name: str = ""
    agent: Any = None


def new_participant(race: Race, agent: Any, name: str) -> PlayerSetup:
    """A slot played by the given agent."""
    return PlayerSetup(PlayerType.PARTICIPANT, race=race, player_name=name, agent=agent)


def new_computer(race: Race, difficulty: int, build: int) -> PlayerSetup:
    """A slot played by the built-in AI."""
    return PlayerSetup(PlayerType.COMPUTER, race=race, difficulty=difficulty, ai_build=build)


def new_observer(agent: Any, name: str) -> PlayerSetup:
    """A slot that only observes the game."""
    return PlayerSetup(PlayerType.OBSERVER, player_name=name, agent=agent)