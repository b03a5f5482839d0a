"""Config – settings dataclasses, loaders and validation errors."""
