"""Split-flap price board: quote polling, reveal sequencing and a Textual UI."""
