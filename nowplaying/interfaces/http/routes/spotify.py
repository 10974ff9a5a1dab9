import logging

from flask import Blueprint, current_app, jsonify

from nowplaying.auth import require_api_key
from nowplaying.domain.spotify import WidgetError

logger = logging.getLogger(__name__)

spotify_bp = Blueprint('spotify_bp', __name__, url_prefix='/api/spotify')


@spotify_bp.route('/track-widget', methods=['GET'])
@require_api_key
def get_track_widget():
    """Current track, else the most recently played one, for the public widget."""
    service = current_app.extensions['widget_service']
    try:
        details = service.get_track_details()
    except WidgetError as e:
        # Upstream diagnostics stay in the server log
        return jsonify(e.to_dict()), e.status_code
    return jsonify(details.model_dump()), 200
