"""Runtime configuration, models and errors for the journal platform."""
