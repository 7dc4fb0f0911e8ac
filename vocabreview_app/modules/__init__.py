"""Feature modules of the quiz engine."""
