"""TripSelect: destination selection and diversity engine."""

__version__ = "0.1.0"
