from notebook_pins.panel.actions import parse_panel_action
from notebook_pins.panel.controller import PanelController
from notebook_pins.panel.render import render_panel_html

__all__ = ["PanelController", "parse_panel_action", "render_panel_html"]
