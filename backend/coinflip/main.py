from flask import Blueprint, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Coinflip server is running. Connect with Socket.IO to play.'})
