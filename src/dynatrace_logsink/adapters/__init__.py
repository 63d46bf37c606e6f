"""Adapters connecting the core to stdlib logging and record queues."""
