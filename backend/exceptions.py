class AnalysisError(Exception):
    """Base error for the analysis backend."""


class LandmarkSchemaError(AnalysisError):
    """A landmark array does not follow the 33-point schema."""


class ReportNotFoundError(AnalysisError):
    """No stored analysis with the requested id."""
