"""FastAPI endpoints for the box optimizer."""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from box_optimizer.config import Settings, get_settings
from box_optimizer.io.schemas import BestBoxResponse, MultiBoxResponse, parse_items
from box_optimizer.models import BoxTemplate
from box_optimizer.packing.multi_box import pack_items_into_multiple_boxes
from box_optimizer.packing.selector import find_best_box

logger = logging.getLogger(__name__)


def _json_response(payload: dict[str, Any], status_code: int) -> Response:
    return Response(
        content=json.dumps(payload),
        status_code=status_code,
        media_type="application/json",
    )


def _bad_request(message: str) -> Response:
    return _json_response({"success": False, "message": message}, 400)


def _validation_error(e: ValidationError) -> Response:
    details = [
        {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
        for err in e.errors()
    ]
    return _json_response(
        {
            "success": False,
            "error": "INVALID_ITEMS",
            "message": "One or more items are invalid. Dimensions and weight must be positive numbers.",
            "details": details,
        },
        422,
    )


def create_app(catalog: Sequence[BoxTemplate] | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the API around a fixed box catalog.

    Args:
        catalog: Boxes to pack with; defaults to the catalog from settings
        settings: Runtime settings; defaults to get_settings()
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Box Optimizer API",
        description="Shipping box selection and 3D packing service",
    )
    app.state.catalog = tuple(catalog) if catalog is not None else settings.catalog()

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.get("/health")
    async def health(request: Request) -> dict[str, Any]:
        """Health check endpoint."""
        return {"ok": True, "catalog_size": len(request.app.state.catalog)}

    @app.get("/boxes")
    async def boxes(request: Request) -> list[dict[str, Any]]:
        """All box types available for packing."""
        return [box.model_dump() for box in request.app.state.catalog]

    @app.post("/calculate-best-box")
    async def calculate_best_box(request: Request, payload: list[dict[str, Any]]) -> Any:
        """
        Find the single best box for a list of items.

        Input (request body):
            [
                { "sku": "A", "length": 10, "width": 10, "height": 10, "weight": 100, "quantity": 2 }
            ]
        """
        if not payload:
            return _bad_request("Request body must be a non-empty array of items.")
        try:
            items = parse_items(payload)
        except ValidationError as e:
            return _validation_error(e)

        try:
            result = find_best_box(items, request.app.state.catalog)
            response = BestBoxResponse.from_result(result).model_dump()
        except Exception as e:
            logger.error(f"ERROR in /calculate-best-box endpoint: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(
            f"items={len(items)}, success={result.success}, "
            f"box={result.box.id if result.box else None}"
        )
        return response

    @app.post("/pack-multiple-boxes")
    async def pack_multiple_boxes(request: Request, payload: list[dict[str, Any]]) -> Any:
        """
        Pack a list of items into one or more boxes.

        Input (request body): same item array as /calculate-best-box.

        Returns:
            success, shipments (box, packed items, placements, metrics), unfit_items
        """
        if not payload:
            return _bad_request("Request body must be a non-empty array of items.")
        try:
            items = parse_items(payload)
        except ValidationError as e:
            return _validation_error(e)

        try:
            result = pack_items_into_multiple_boxes(items, request.app.state.catalog)
            response = MultiBoxResponse.from_result(result).model_dump()
        except Exception as e:
            logger.error(f"ERROR in /pack-multiple-boxes endpoint: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(
            f"items={len(items)}, boxes={len(result.shipments)}, "
            f"unfit={len(result.unfit_items)}"
        )
        return response

    return app


app = create_app()
