"""Booking JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from devevent.core.utils.validation import jsonable_errors
from devevent.domains.bookings.mappers import map_booking
from devevent.domains.bookings.schemas import BookingCreate
from devevent.domains.bookings.services import create_booking

booking_api_bp = Blueprint("booking_api", __name__)


@booking_api_bp.post("")
def create_booking_route():
    payload = request.get_json(silent=True) or {}
    try:
        data = BookingCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    booking = create_booking(data.event_id, data.email)
    return jsonify({"ok": True, "message": "Booking created successfully", "booking": map_booking(booking)}), 201
