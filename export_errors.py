class ExportError(RuntimeError):
    """Raised when a renderer backend fails; ``stage`` names the step that broke."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage}: {message}")
        self.stage = stage
