"""Virtual Architect: floorplan scoring and conversational follow-up."""

__version__ = "0.1.0"
