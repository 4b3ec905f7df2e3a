"""spell-notes — Render spell data files into Markdown design notes."""

from pathlib import Path

__version__ = "0.2.0"

DEFAULT_SPELLS_DIR: Path = Path("game_data") / "spells"
DEFAULT_OUT_DIR: Path = Path("design_notes")
