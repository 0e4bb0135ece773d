"""Game and data version the identifiers were generated for."""

from __future__ import annotations

GAME_VERSION = "5.0.7.84643"
DATA_VERSION = "A389D1F7DF9DD792FBE980533B7119FF"
DATA_BUILD = 84643
BASE_BUILD = 84643


def format_version(game_version: str, base_build: int) -> str:
    """Show the game version, adding the base build if it is not its last part."""
    if game_version.endswith(f".{base_build}"):
        return game_version
    return f"{game_version}({base_build})"


def version_report(
    game_version: str, base_build: int, data_build: int, data_version: str
) -> list[str]:
    """Team chat messages comparing the running game with the expected versions."""
    current = format_version(game_version, base_build)
    if base_build == BASE_BUILD and game_version == GAME_VERSION:
        messages = [f"(sc2) {current} (thumbsup)"]
    else:
        expected = format_version(GAME_VERSION, BASE_BUILD)
        messages = [f"(sc2) {current} (thumbsdown) ({expected})"]

    # Mismatched data versions mean generated ids may be wrong.
    if data_build != DATA_BUILD or data_version != DATA_VERSION:
        messages.append(
            f"(poo) (poo) (angry) (poo) (poo) {data_build}:{data_version} "
            f"(scared) {DATA_BUILD}:{DATA_VERSION}"
        )
    return messages