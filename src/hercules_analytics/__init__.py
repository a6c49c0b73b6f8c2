"""hercules-analytics: training volume, balance and insight analytics for logged workouts."""

__version__ = "0.1.0"
