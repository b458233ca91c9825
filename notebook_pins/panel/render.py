from jinja2 import Environment, PackageLoader, select_autoescape

from notebook_pins.domain.panel import PanelRenderModel

_env = Environment(
    loader=PackageLoader("notebook_pins.panel", "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_panel_html(model: PanelRenderModel) -> str:
    """Render the pin strip for a panel model."""
    template = _env.get_template("panel.html")
    return template.render(model=model, title=model.title or "PINNED")
