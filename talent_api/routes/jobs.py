"""Job listing and the protected job-posting form."""

from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, send_from_directory

from talent_api.routes.auth import request_payload
from talent_api.storage import get_state
from talent_api.utils.auth import login_required

bp = Blueprint("jobs", __name__)


@bp.get("/api/jobs")
def list_jobs():
    """Return every posting, oldest first."""
    return jsonify([job.to_dict() for job in get_state().jobs.list()]), 200


@bp.post("/post-job")
@login_required
def post_job():
    job = get_state().jobs.create(g.session, request_payload())
    return jsonify(success=True, job=job.to_dict()), 200


@bp.get("/post-job.html")
@login_required
def post_job_page():
    """Serve the job-posting page only to logged-in staff."""
    return send_from_directory(current_app.config["PUBLIC_DIR"], "post-job.html")
