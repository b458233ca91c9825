from typing import Any

from pydantic import TypeAdapter, ValidationError

from notebook_pins.domain.panel import PanelAction

_action_adapter: TypeAdapter[PanelAction] = TypeAdapter(PanelAction)


def parse_panel_action(message: Any) -> PanelAction | None:
    """Validate an untrusted webview message.

    Args:
        message: JSON text or an already decoded payload

    Returns:
        The parsed action, or None for anything malformed
    """
    try:
        if isinstance(message, (str, bytes)):
            return _action_adapter.validate_json(message)
        return _action_adapter.validate_python(message)
    except ValidationError:
        return None
