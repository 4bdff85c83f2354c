"""Home: service banner."""
from flask import Blueprint, jsonify

home_bp = Blueprint('home', __name__)


@home_bp.route('/')
def index():
    return jsonify({
        'name': 'Pathwise',
        'message': 'Personalized learning roadmap generator',
        'endpoints': {'roadmap': 'POST /api/roadmap'},
    })
