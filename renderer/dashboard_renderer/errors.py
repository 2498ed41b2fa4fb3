class DashboardSchemaError(ValueError):
    """Resolved payload is not a dashboard: `version` or a list of `cards` is missing."""

    default_message = "Dashboard JSON missing required fields ('version', 'cards')."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
