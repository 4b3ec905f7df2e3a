"""Allow ``python -m spell_notes``."""

from spell_notes.cli import app

if __name__ == "__main__":
    app()
