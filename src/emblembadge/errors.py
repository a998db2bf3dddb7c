"""Exceptions raised by the badge rendering pipeline."""


class BadgeError(RuntimeError):
    """A render failed. `stage` names the step that failed."""

    stage = "render"

    def __init__(self, message: str, stage: str | None = None):
        if stage is not None:
            self.stage = stage
        super().__init__(f"failed to {self.stage}: {message}")


class ImageLoadError(BadgeError):
    """The background artwork is missing or cannot be decoded."""

    stage = "load source"


class FontLoadError(BadgeError):
    """Typeface data could not be parsed at one of the configured sizes."""

    stage = "load fonts"


class OutputError(BadgeError):
    """The finished badge could not be encoded or written."""

    stage = "encode output"
