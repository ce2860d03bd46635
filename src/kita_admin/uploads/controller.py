from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from ..auth.guard import decide_access, session_user
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import UploadRejected

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/upload", methods=["POST"], endpoint="api_upload")
    def api_upload():
        if not decide_access(session_user(), allowed_roles=(Role.ADMIN,)).allowed:
            return jsonify({"error": "Nicht autorisiert"}), 401

        try:
            path = container.upload_service.store(request.files.get("file"))
        except UploadRejected as e:
            return jsonify({"error": str(e)}), 400
        except RequestEntityTooLarge:
            return jsonify({"error": "Datei zu groß"}), 400
        except Exception:
            logger.exception("Upload failed")
            return jsonify({"error": "Fehler beim Hochladen"}), 500

        return jsonify({"path": path})
