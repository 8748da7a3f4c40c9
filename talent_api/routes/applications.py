"""Public job-application form with resume upload."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from talent_api.services.intake_service import SUCCESS_MESSAGE
from talent_api.storage import get_state
from talent_api.utils.uploads import RESUME_FIELD, has_file, stage_upload

bp = Blueprint("applications", __name__)


@bp.post("/submit-contact")
def submit_contact():
    """Stage the resume, then forward the application to the HR inbox."""
    storage = request.files.get(RESUME_FIELD)
    staged = None
    if has_file(storage):
        staged = stage_upload(
            storage,
            current_app.config["UPLOAD_DIR"],
            current_app.config["MAX_RESUME_BYTES"],
        )

    get_state().intake.submit(request.form, staged)
    return jsonify(success=True, message=SUCCESS_MESSAGE), 200
