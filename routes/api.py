"""JSON API: roadmap generation endpoint."""
import logging

from flask import Blueprint, jsonify, request

from models.roadmap_request import RequestValidationError, from_payload
from services import roadmap_service

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


@api_bp.route('/roadmap', methods=['POST'])
def create_roadmap():
    """Validate the request body and return a week-by-week roadmap."""
    payload = request.get_json(silent=True)
    try:
        roadmap_request = from_payload(payload)
    except RequestValidationError as e:
        return jsonify({'error': str(e)}), 400

    try:
        roadmap, source = roadmap_service.generate(roadmap_request)
    except roadmap_service.RoadmapGenerationError as e:
        logger.error('Roadmap generation failed: %s', e)
        return jsonify({'error': 'Failed to generate roadmap. Please try again.'}), 502

    logger.info('Roadmap for "%s" served from %s', roadmap_request.goal, source)
    return jsonify(roadmap)
