class AnalysisError(Exception):
    """Base class for failures recovered inside the analysis engine."""


class TransportError(AnalysisError):
    """Network failure, timeout, non-success HTTP status or unusable vendor envelope."""


class ParseError(AnalysisError):
    """Provider text contains no decodable JSON object."""
