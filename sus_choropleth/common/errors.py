"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """Raised for stage failures that abort the run."""

    error_code = "STAGE_ERROR"


class HeaderNotFound(StageError):
    """Raised when no row of the source table carries a 20xx year cell."""

    error_code = "HEADER_NOT_FOUND"


class MissingYearColumn(StageError):
    """Raised when the requested year is not a column of the detected header."""

    error_code = "MISSING_YEAR_COLUMN"

    def __init__(self, year: str, columns: list[str]) -> None:
        super().__init__(f"Year {year} is not a column of the source table; columns = {columns}")
        self.year = year
        self.columns = columns


class AmbiguousJoinKey(StageError):
    """Raised when several metric rows normalise to the same join key."""

    error_code = "AMBIGUOUS_JOIN_KEY"

    def __init__(self, keys: list[str]) -> None:
        super().__init__(f"Duplicate join keys in metric rows: {', '.join(keys)}")
        self.keys = keys


class UnsupportedGeometry(StageError):
    """Raised for boundary geometries other than Polygon/MultiPolygon."""

    error_code = "UNSUPPORTED_GEOMETRY"
