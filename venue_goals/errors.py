"""Exceptions raised by the VenueGoals pipeline."""


class VenueGoalsError(Exception):
    """Base class for all pipeline errors."""


class DataLoadError(VenueGoalsError):
    """Input file is missing, unreadable or does not match the expected schema."""


class InsufficientDataError(VenueGoalsError):
    """A venue group is too small for a two-sample test."""


class RenderError(VenueGoalsError):
    """A figure or report could not be written to the output directory."""
