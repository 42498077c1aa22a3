"""skel — materialize a shared project skeleton with per-project overrides."""

__version__ = "0.1.0"
