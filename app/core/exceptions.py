"""Engine error hierarchy."""


class EngineError(Exception):
    """Base class for session engine errors."""


class TemplateNotFoundError(EngineError):
    """Raised when a workout template id is not in the catalog."""

    def __init__(self, template_id: str):
        super().__init__(f"Template '{template_id}' not found")
        self.template_id = template_id
