"""Core domain — config, models, services and use cases."""
