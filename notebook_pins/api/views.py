"""Endpoints returning the panel HTML"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from notebook_pins.panel.controller import PanelController
from notebook_pins.panel.render import render_panel_html


def get_views_router(controller: PanelController) -> APIRouter:
    router = APIRouter()

    @router.get("/panel", response_class=HTMLResponse)
    async def panel():
        return HTMLResponse(render_panel_html(controller.model))

    return router
