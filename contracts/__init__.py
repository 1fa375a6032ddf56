"""Versioned input contracts for the sleep-journal platform."""
