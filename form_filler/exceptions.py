class OptionsLoadError(Exception):
    """Raised when a fill options file exists but cannot be parsed or validated."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        self.message = message if message is not None else f"Failed to load fill options from: {path}"
        super().__init__(self.message)


class ValueGenerationError(Exception):
    """Raised by a value generator that produced no usable value."""

    def __init__(self, field_type: str, message: str | None = None):
        self.field_type = field_type
        self.message = (
            message if message is not None else f"No usable value generated for field type '{field_type}'"
        )
        super().__init__(self.message)
