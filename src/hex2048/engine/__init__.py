"""Game session state machine and its event loop."""
