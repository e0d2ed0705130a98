class ReportEncodingError(Exception):
    """The report tree could not be marshalled to XML."""
