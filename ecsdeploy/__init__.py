"""Build, push and roll out versioned container releases to Amazon ECS."""

__version__ = "0.1.0"
