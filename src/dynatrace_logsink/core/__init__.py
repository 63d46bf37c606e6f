"""Core domain: models, flattening, templates and encoders."""
