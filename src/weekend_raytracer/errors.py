# errors.py


class RaytracerError(Exception):
    """Base class for errors raised by the renderer."""


class ConfigurationError(RaytracerError):
    """Invalid render or camera options, raised before any rendering starts."""

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class RenderError(RaytracerError):
    """A worker failed or the framebuffer was not fully written."""
