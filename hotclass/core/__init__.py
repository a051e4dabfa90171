"""Core: class manager, catalogue, probe, registry and locking."""
