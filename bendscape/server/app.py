"""FastAPI application that exposes generation, export and presets."""
from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from ..config import AppSettings
from ..controller import BendscapeController
from ..errors import BendscapeError, PresetError
from ..presets import PresetStore


def create_controller(settings: AppSettings | None = None) -> BendscapeController:
    settings = settings or AppSettings.from_env()
    return BendscapeController(presets=PresetStore(settings.preset_path))


def create_app(controller: BendscapeController) -> FastAPI:
    app = FastAPI(title="Bendscape Server")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.controller = controller

    @app.get("/api/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/status")
    def status() -> Dict[str, Any]:
        return {
            "parameters": controller.get_parameters().to_dict(),
            "drawing": controller.summary(),
        }

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------
    @app.get("/api/parameters")
    def get_parameters() -> Dict[str, Any]:
        return controller.get_parameters().to_dict()

    @app.put("/api/parameters")
    def put_parameters(payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            params = controller.update_parameters(payload)
        except BendscapeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return params.to_dict()

    @app.post("/api/parameters/reset")
    def reset_parameters() -> Dict[str, Any]:
        return controller.reset_parameters().to_dict()

    @app.post("/api/parameters/randomize")
    def randomize_parameters() -> Dict[str, Any]:
        return controller.randomize().to_dict()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    @app.post("/api/generate")
    def generate() -> Dict[str, Any]:
        controller.generate()
        return controller.summary()

    @app.delete("/api/drawing")
    def clear_drawing() -> Dict[str, Any]:
        controller.clear()
        return {"ok": True}

    @app.get("/api/strokes")
    def strokes() -> Dict[str, Any]:
        return controller.strokes()

    @app.get("/api/export/svg")
    def export_svg(annotations: bool = False) -> Response:
        try:
            svg = controller.export_svg(annotations=annotations)
        except BendscapeError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(content=svg, media_type="image/svg+xml")

    @app.get("/api/export/json")
    def export_json() -> Response:
        try:
            text = controller.export_json()
        except BendscapeError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(content=text, media_type="application/json")

    @app.post("/api/import")
    def import_json(payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            controller.import_json(json.dumps(payload))
        except BendscapeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return controller.summary()

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    @app.get("/api/presets")
    def list_presets() -> Dict[str, Any]:
        return {"presets": [p.to_dict() for p in controller.list_presets()]}

    @app.post("/api/presets")
    def save_preset(payload: Dict[str, Any]) -> Dict[str, Any]:
        name = str(payload.get("name", "")).strip()
        if not name:
            raise HTTPException(status_code=400, detail="name is required")
        try:
            preset = controller.save_preset(name)
        except PresetError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return preset.to_dict()

    @app.post("/api/presets/{name}/load")
    def load_preset(name: str) -> Dict[str, Any]:
        params = controller.load_preset(name)
        if params is None:
            raise HTTPException(status_code=404, detail=f"Unknown preset: {name}")
        return params.to_dict()

    @app.delete("/api/presets/{name}")
    def delete_preset(name: str) -> Dict[str, Any]:
        try:
            deleted = controller.delete_preset(name)
        except PresetError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        if not deleted:
            raise HTTPException(status_code=404, detail=f"Unknown preset: {name}")
        return {"ok": True}

    return app


controller = create_controller()
app = create_app(controller)


__all__ = ["app", "controller", "create_app", "create_controller"]
