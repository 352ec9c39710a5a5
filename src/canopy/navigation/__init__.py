"""Navigation — the stateful navigator, its stack, and its event stream."""
