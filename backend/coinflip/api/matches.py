from flask import Blueprint, jsonify
from coinflip import wagering


matches = Blueprint('matches', __name__)


@matches.route('', methods=['GET'])
@matches.route('/', methods=['GET'])
def list_open_matches():
    """Matches still waiting for an opponent, oldest first."""
    return jsonify([m.to_dict() for m in wagering.registry.open_matches()])


@matches.route('/<string:match_id>', methods=['GET'])
def get_match(match_id):
    match = wagering.registry.get(match_id)
    if match is None:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify(match.to_dict())
