class ReportError(Exception):
    """Base class for failures that abort parsing of a trade-history report."""
    default_message = "The report could not be processed."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class MissingSectionError(ReportError):
    default_message = "Could not find the 'Closed Transactions' table in the report."


class EmptyReportError(ReportError):
    default_message = "No closed trades found in the report. Please check the file content."


class MalformedInputError(ReportError):
    default_message = "Failed to parse the HTML file. It might be corrupted or in an unexpected format."
