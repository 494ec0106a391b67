"""Console task planner with one-way export to Google Calendar."""

__version__ = "0.1.0"
