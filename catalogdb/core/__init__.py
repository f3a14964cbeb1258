"""Core store: entry model, database mixins, lifecycle and logging."""
