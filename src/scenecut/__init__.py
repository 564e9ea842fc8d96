"""SceneCut: cut a long recording into dated, named scene clips from a CSV plan."""

__version__ = "0.1.0"
